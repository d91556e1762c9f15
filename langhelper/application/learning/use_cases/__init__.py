from .card_inversion_use_case import CardInversionUseCase
from .exceptions import CardNotFoundError, ProfileNotFoundError
from .learning_session_use_case import LearningSessionUseCase
from .streak_use_case import StreakUseCase

__all__ = [
    "CardInversionUseCase",
    "CardNotFoundError",
    "LearningSessionUseCase",
    "ProfileNotFoundError",
    "StreakUseCase",
]
