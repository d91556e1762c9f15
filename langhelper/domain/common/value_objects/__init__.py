"""Common value objects shared across all domain modules."""

from .ids import CardId, LearningSessionId

__all__ = [
    "CardId",
    "LearningSessionId",
]
