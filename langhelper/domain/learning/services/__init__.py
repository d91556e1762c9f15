"""Learning domain services."""

from .answer_matcher import AnswerMatch, AnswerMatcher, damerau_levenshtein, typo_tolerance
from .card_inverter import CardInverter
from .streak_policy import StreakMode, StreakPolicy

__all__ = [
    "AnswerMatch",
    "AnswerMatcher",
    "CardInverter",
    "StreakMode",
    "StreakPolicy",
    "damerau_levenshtein",
    "typo_tolerance",
]
