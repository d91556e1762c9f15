"""Domain events raised by learning sessions."""

from dataclasses import dataclass, field

from langhelper.domain.common.domain_event import DomainEvent
from langhelper.domain.common.value_objects import LearningSessionId


@dataclass(frozen=True, kw_only=True)
class SetPassed(DomainEvent):
    session_id: LearningSessionId
    set_number: int
    word_names: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True, kw_only=True)
class SetFailed(DomainEvent):
    session_id: LearningSessionId
    set_number: int
    failed_word_names: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True, kw_only=True)
class SessionCompleted(DomainEvent):
    session_id: LearningSessionId
    total_cards: int
    total_sets: int
