from .card import Card, CardType, Meaning, Word
from .card_settings import AnswerMethod, CardSettings
from .learning_session import LearningPhase, LearningSession, SessionMode
from .test_result import TestResult

__all__ = [
    "AnswerMethod",
    "Card",
    "CardSettings",
    "CardType",
    "LearningPhase",
    "LearningSession",
    "Meaning",
    "SessionMode",
    "TestResult",
    "Word",
]
