"""
Per-profile card settings.
"""

from dataclasses import dataclass
from enum import StrEnum

from langhelper.domain.common.exceptions import ValidationError
from langhelper.domain.common.value_object import ValueObject

MIN_CARDS_PER_SET = 1
MAX_CARDS_PER_SET = 100
MIN_STREAK_THRESHOLD = 1
MAX_STREAK_THRESHOLD = 50


class AnswerMethod(StrEnum):
    """How the learner answers during the test phase."""

    MANUAL = "manual"
    SELF_REVIEW = "self_review"

    @classmethod
    def parse(cls, value: str) -> "AnswerMethod":
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValidationError(
                f"Invalid test method: {value}. Must be 'manual' or 'self_review'",
                field="test_method",
                value=value,
            ) from None


@dataclass(frozen=True)
class CardSettings(ValueObject):
    """
    Settings that control how cards are grouped and when they count as learned.

    Business Rules:
    - cards_per_set is between 1 and 100
    - streak_threshold is between 1 and 50
    """

    cards_per_set: int = 10
    test_method: AnswerMethod = AnswerMethod.MANUAL
    streak_threshold: int = 5

    def __post_init__(self) -> None:
        if not MIN_CARDS_PER_SET <= self.cards_per_set <= MAX_CARDS_PER_SET:
            raise ValidationError(
                f"Cards per set must be between {MIN_CARDS_PER_SET} and {MAX_CARDS_PER_SET}",
                field="cards_per_set",
                value=self.cards_per_set,
            )
        if not MIN_STREAK_THRESHOLD <= self.streak_threshold <= MAX_STREAK_THRESHOLD:
            raise ValidationError(
                f"Streak threshold must be between {MIN_STREAK_THRESHOLD} "
                f"and {MAX_STREAK_THRESHOLD}",
                field="streak_threshold",
                value=self.streak_threshold,
            )
        if not isinstance(self.test_method, AnswerMethod):
            object.__setattr__(self, "test_method", AnswerMethod.parse(self.test_method))
