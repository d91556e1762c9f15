from dataclasses import dataclass
from uuid import UUID

from ..entity import EntityId


@dataclass(frozen=True)
class CardId(EntityId):
    """Strongly-typed card identifier, assigned by the card store."""

    value: int

    def __post_init__(self) -> None:
        if self.value <= 0:
            raise ValueError("CardId must be positive")


@dataclass(frozen=True)
class LearningSessionId(EntityId):
    """Identifier of a transient learning session (never persisted)."""

    value: UUID
