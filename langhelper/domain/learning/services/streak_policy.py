"""Domain rules for updating card streaks after a test."""

from enum import StrEnum


class StreakMode(StrEnum):
    # Unlearned cards: every correct answer counts towards learning
    TEST = "test"
    # Learned cards: correct answers keep the card learned, a miss demotes it
    REPEAT = "repeat"


class StreakPolicy:
    """Stateless domain service computing the next streak of a card."""

    @staticmethod
    def next_streak(current_streak: int, is_correct: bool, mode: StreakMode) -> int:
        if not is_correct:
            return 0
        if mode is StreakMode.REPEAT:
            return current_streak
        return current_streak + 1
