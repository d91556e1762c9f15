"""
LearningSession aggregate root.
"""

import copy
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import StrEnum

from langhelper.domain.common.aggregate_root import AggregateRoot
from langhelper.domain.common.exceptions import (
    BusinessRuleViolationError,
    InvariantViolationError,
    ValidationError,
)
from langhelper.domain.common.value_objects import LearningSessionId
from langhelper.domain.learning.entities.card import Card, CardType
from langhelper.domain.learning.entities.card_settings import AnswerMethod
from langhelper.domain.learning.entities.test_result import TestResult
from langhelper.domain.learning.events import SessionCompleted, SetFailed, SetPassed


class LearningPhase(StrEnum):
    STUDY = "study"
    TEST = "test"


class SessionMode(StrEnum):
    """What a session is run for; decides how its results move streaks."""

    LEARN = "learn"
    TEST = "test"
    REPEAT = "repeat"


@dataclass
class LearningSession(AggregateRoot[LearningSessionId]):
    """
    Learning session aggregate root.

    Walks an ordered snapshot of cards in fixed-size sets. Each set is first
    studied card by card, then tested; a passed set advances to the next one,
    a failed set is repeated.

    Business Rules:
    - cards_per_set is at least 1 for the whole session
    - current_card_in_set always points inside the current set
    - The card snapshot never changes after creation
    - Only the study phase moves the cursor with advance_to_next_card()
    - Answers are recorded only during the test phase
    - The session completes once the set start index runs past the last card

    The session lives for one study/test run and has a single owner; it is
    not safe for concurrent mutation.
    """

    id: LearningSessionId
    all_cards: tuple[Card, ...]
    cards_per_set: int
    test_method: AnswerMethod = AnswerMethod.MANUAL
    mode: SessionMode = SessionMode.LEARN
    current_set_start_index: int = 0
    phase: LearningPhase = LearningPhase.STUDY
    current_card_in_set: int = 0
    test_results: list[TestResult] = field(default_factory=list)

    # Answer progress for the card under test
    provided_answers: list[str] = field(default_factory=list)
    current_card_failed: bool = False

    def __post_init__(self) -> None:
        """Validate invariants."""
        self.all_cards = tuple(self.all_cards)
        if self.cards_per_set < 1:
            raise ValidationError(
                "Cards per set must be greater than zero",
                field="cards_per_set",
                value=self.cards_per_set,
            )
        if self.current_set_start_index < 0:
            raise ValidationError(
                "Set start index cannot be negative",
                field="current_set_start_index",
                value=self.current_set_start_index,
            )
        if not 0 <= self.current_card_in_set < max(1, len(self.current_set())):
            raise InvariantViolationError(
                "LearningSession", "current_card_in_set must point inside the current set"
            )

    # Set navigation

    def current_set(self) -> tuple[Card, ...]:
        start = self.current_set_start_index
        return self.all_cards[start : start + self.cards_per_set]

    def current_card(self) -> Card | None:
        current_set = self.current_set()
        if self.current_card_in_set < len(current_set):
            return current_set[self.current_card_in_set]
        return None

    def has_more_cards(self) -> bool:
        return self.current_set_start_index < len(self.all_cards)

    @property
    def is_complete(self) -> bool:
        return not self.has_more_cards()

    def total_sets(self) -> int:
        return -(-len(self.all_cards) // self.cards_per_set)

    def current_set_number(self) -> int:
        """1-indexed number of the current set, for display."""
        return self.current_set_start_index // self.cards_per_set + 1

    # Study phase

    def advance_to_next_card(self) -> bool:
        """
        Move the study cursor forward.

        Returns:
            False when already on the last card of the set; the caller
            should then call start_test_phase()

        Raises:
            BusinessRuleViolationError: If the session is not in the study phase
        """
        self._require_phase(LearningPhase.STUDY, "advance_only_while_studying")
        if self.current_card_in_set + 1 < len(self.current_set()):
            self.current_card_in_set += 1
            return True
        return False

    def is_study_complete(self) -> bool:
        return (
            self.phase is LearningPhase.STUDY
            and self.current_card_in_set + 1 >= len(self.current_set())
        )

    def start_test_phase(self) -> None:
        self._require_phase(LearningPhase.STUDY, "test_starts_after_study")
        self.phase = LearningPhase.TEST
        self.current_card_in_set = 0
        self.test_results.clear()
        self._reset_card_progress()

    # Test phase

    def is_test_complete(self) -> bool:
        return self.phase is LearningPhase.TEST and len(self.test_results) >= len(
            self.current_set()
        )

    def add_test_result(self, result: TestResult) -> None:
        # One result per card per set is left to the caller.
        self.test_results.append(result)

    def is_set_passed(self) -> bool:
        return bool(self.test_results) and all(r.is_correct for r in self.test_results)

    def remaining_answers(self) -> list[str]:
        """Acceptable answers of the current card that were not consumed yet."""
        card = self.current_card()
        if card is None:
            return []
        if card.card_type is CardType.REVERSE:
            remaining = card.acceptable_answers()
            for answer in self.provided_answers:
                if answer in remaining:
                    remaining.remove(answer)
            return remaining

        # A straight translation is open only while it can still cover a new meaning
        covered = card.answered_count(self.provided_answers)
        open_answers: list[str] = []
        for answer in card.acceptable_answers():
            if answer in open_answers:
                continue
            if card.answered_count([*self.provided_answers, answer]) > covered:
                open_answers.append(answer)
        return open_answers

    def mark_answer_provided(self, answer: str) -> None:
        self._require_phase(LearningPhase.TEST, "answers_only_while_testing")
        self.provided_answers.append(answer)

    def mark_current_card_failed(self) -> None:
        self._require_phase(LearningPhase.TEST, "answers_only_while_testing")
        self.current_card_failed = True

    def is_current_card_complete(self) -> bool:
        card = self.current_card()
        if card is None:
            return False
        return (
            self.current_card_failed
            or card.answered_count(self.provided_answers) >= card.required_answer_count()
        )

    def complete_current_card(self) -> TestResult:
        """
        Record the written-answer result of the current card and move on.

        Raises:
            BusinessRuleViolationError: Outside the test phase, on an empty set,
                or when every card of the set already has a result
        """
        card = self._card_under_test()
        result = TestResult.written(
            word_name=card.word_name,
            is_correct=not self.current_card_failed,
            user_answer=", ".join(self.provided_answers),
            expected_answer=", ".join(card.acceptable_answers()),
        )
        self._record_and_move_on(result)
        return result

    def record_self_review(self, is_correct: bool) -> TestResult:
        """Record the learner's own verdict for the current card and move on."""
        card = self._card_under_test()
        result = TestResult.self_review(card.word_name, is_correct)
        self._record_and_move_on(result)
        return result

    # Set transitions

    def advance_to_next_set(self) -> bool:
        """
        Move to the next set after passing the current one.

        Returns:
            True if another set is available, False if all cards are done
        """
        self.current_set_start_index += self.cards_per_set
        if self.current_set_start_index < len(self.all_cards):
            self.phase = LearningPhase.STUDY
            self.current_card_in_set = 0
            self.test_results.clear()
            self._reset_card_progress()
            return True
        return False

    def retry_current_set(self) -> None:
        self.phase = LearningPhase.STUDY
        self.current_card_in_set = 0
        self.test_results.clear()
        self._reset_card_progress()

    def finish_set(self) -> bool:
        """
        Close a fully tested set: advance on pass, retry on fail.

        Returns:
            Whether the set was passed

        Raises:
            BusinessRuleViolationError: If the test of the current set is not complete
        """
        if not self.is_test_complete():
            raise BusinessRuleViolationError(
                "set_finished_after_test", "Every card of the set must be tested first"
            )

        set_number = self.current_set_number()
        if self.is_set_passed():
            self._record_event(
                SetPassed(
                    session_id=self.id,
                    set_number=set_number,
                    word_names=tuple(card.word_name for card in self.current_set()),
                )
            )
            if not self.advance_to_next_set():
                self._record_event(
                    SessionCompleted(
                        session_id=self.id,
                        total_cards=len(self.all_cards),
                        total_sets=self.total_sets(),
                    )
                )
            return True

        self._record_event(
            SetFailed(
                session_id=self.id,
                set_number=set_number,
                failed_word_names=tuple(
                    r.word_name for r in self.test_results if not r.is_correct
                ),
            )
        )
        self.retry_current_set()
        return False

    # Internals

    def _require_phase(self, phase: LearningPhase, rule: str) -> None:
        if self.phase is not phase:
            raise BusinessRuleViolationError(
                rule, f"Operation requires the {phase} phase, session is in {self.phase}"
            )

    def _card_under_test(self) -> Card:
        self._require_phase(LearningPhase.TEST, "answers_only_while_testing")
        if self.is_test_complete():
            raise BusinessRuleViolationError(
                "one_result_per_card", "Every card of the set already has a result"
            )
        card = self.current_card()
        if card is None:
            raise BusinessRuleViolationError("card_required", "The current set has no cards")
        return card

    def _record_and_move_on(self, result: TestResult) -> None:
        self.add_test_result(result)
        self._reset_card_progress()
        if self.current_card_in_set + 1 < len(self.current_set()):
            self.current_card_in_set += 1

    def _reset_card_progress(self) -> None:
        self.provided_answers.clear()
        self.current_card_failed = False

    @classmethod
    def create(
        cls,
        cards: Iterable[Card],
        cards_per_set: int,
        test_method: AnswerMethod = AnswerMethod.MANUAL,
        start_index: int = 0,
    ) -> "LearningSession":
        """
        Factory method for a study/test session.

        Args:
            cards: Cards in study order; the session keeps private copies
            cards_per_set: Number of cards per set (must be at least 1)
            test_method: How answers are checked in the test phase
            start_index: 0-based index of the first card of the first set

        Returns:
            New LearningSession in the study phase

        Raises:
            ValidationError: If cards_per_set is below 1
        """
        return cls(
            id=LearningSessionId.generate(),
            all_cards=tuple(copy.deepcopy(card) for card in cards),
            cards_per_set=cards_per_set,
            test_method=test_method,
            current_set_start_index=start_index,
        )

    @classmethod
    def create_test_run(
        cls,
        cards: Iterable[Card],
        test_method: AnswerMethod = AnswerMethod.MANUAL,
        mode: SessionMode = SessionMode.TEST,
    ) -> "LearningSession":
        """Single set holding every card, starting directly in the test phase."""
        snapshot = list(cards)
        session = cls.create(snapshot, max(1, len(snapshot)), test_method)
        session.mode = mode
        session.start_test_phase()
        return session
