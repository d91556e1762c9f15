"""Use case for running study/test sessions over a profile's cards."""

import random

import structlog

from langhelper.application.learning.protocols.card_repository import CardRepositoryProtocol
from langhelper.application.learning.use_cases.exceptions import (
    CardNotFoundError,
    ProfileNotFoundError,
)
from langhelper.application.learning.use_cases.streak_use_case import StreakUseCase
from langhelper.domain.learning.entities.card import Card
from langhelper.domain.learning.entities.card_settings import CardSettings
from langhelper.domain.learning.entities.learning_session import LearningSession, SessionMode
from langhelper.domain.learning.entities.test_result import TestResult
from langhelper.domain.learning.services.answer_matcher import AnswerMatcher
from langhelper.domain.learning.services.streak_policy import StreakMode, StreakPolicy

logger = structlog.get_logger(__name__)


class LearningSessionUseCase:
    """
    Creates learning sessions from the card store and drives them.

    Session state changes are synchronous; only loading cards and
    persisting streaks go through the repository.
    """

    def __init__(
        self,
        card_repository: CardRepositoryProtocol,
        answer_matcher: AnswerMatcher | None = None,
    ) -> None:
        """Initialize use case with the card repository and answer matcher."""
        self.card_repository = card_repository
        self.answer_matcher = answer_matcher or AnswerMatcher()
        self.streak_use_case = StreakUseCase(card_repository)

    async def create_learning_session(
        self, username: str, profile_name: str, start_card_number: int
    ) -> LearningSession:
        """
        Create a study/test session over the profile's unlearned cards.

        Args:
            username: Owner of the profile
            profile_name: Profile to study
            start_card_number: 1-based number of the first card to study;
                out-of-range values are clamped, so a number past the last
                card yields a session that is already complete

        Returns:
            New LearningSession in the study phase

        Raises:
            ProfileNotFoundError: If the profile does not exist
        """
        settings = await self._get_card_settings(username, profile_name)
        cards = await self.card_repository.get_unlearned_cards(username, profile_name)
        cards = sorted(cards, key=lambda card: card.created_at)

        start_index = min(max(start_card_number - 1, 0), len(cards))
        session = LearningSession.create(
            cards=cards,
            cards_per_set=settings.cards_per_set,
            test_method=settings.test_method,
            start_index=start_index,
        )

        logger.info(
            "created_learning_session",
            username=username,
            profile=profile_name,
            cards=len(cards),
            start_index=start_index,
            total_sets=session.total_sets(),
        )
        return session

    async def create_test_session(
        self, username: str, profile_name: str, rng: random.Random | None = None
    ) -> LearningSession:
        """Test every unlearned card once, in random order."""
        settings = await self._get_card_settings(username, profile_name)
        cards = await self.card_repository.get_unlearned_cards(username, profile_name)
        session = self._shuffled_test_run(cards, settings, SessionMode.TEST, rng)

        logger.info(
            "created_test_session", username=username, profile=profile_name, cards=len(cards)
        )
        return session

    async def create_repeat_session(
        self, username: str, profile_name: str, rng: random.Random | None = None
    ) -> LearningSession:
        """Test every learned card once, in random order."""
        settings = await self._get_card_settings(username, profile_name)
        cards = await self.card_repository.get_learned_cards(username, profile_name)
        session = self._shuffled_test_run(cards, settings, SessionMode.REPEAT, rng)

        logger.info(
            "created_repeat_session", username=username, profile=profile_name, cards=len(cards)
        )
        return session

    def check_answer(self, session: LearningSession, user_input: str) -> tuple[bool, str]:
        """
        Grade typed input against the current card of a session in the test phase.

        A match consumes the canonical answer for the card; a miss marks the
        card as failed.

        Returns:
            (is_correct, matched canonical answer or "")

        Raises:
            BusinessRuleViolationError: If the session is not in the test phase
        """
        card = session.current_card()
        if card is None:
            return False, ""

        is_correct, matched = self.answer_matcher.check(user_input, session.remaining_answers())
        if is_correct:
            session.mark_answer_provided(matched)
        else:
            session.mark_current_card_failed()

        logger.debug(
            "checked_answer", word=card.word_name, is_correct=is_correct, matched=matched
        )
        return is_correct, matched

    def process_self_review(
        self, username: str, profile_name: str, word_name: str, is_correct: bool
    ) -> TestResult:
        """Build the result of a self-graded card; typed answers are never consulted."""
        logger.debug(
            "processed_self_review",
            username=username,
            profile=profile_name,
            word=word_name,
            is_correct=is_correct,
        )
        return TestResult.self_review(word_name, is_correct)

    async def finish_set(
        self, username: str, profile_name: str, session: LearningSession
    ) -> bool:
        """
        Close the tested set and persist the streaks it earned.

        A learning session raises the streak of every card of a passed set.
        Test and repeat sessions apply each card's own result, pass or fail,
        with the matching streak rule.

        Returns:
            Whether the set was passed

        Raises:
            BusinessRuleViolationError: If the set is not fully tested
            CardNotFoundError: If a tested card is gone from the store
        """
        tested_cards = session.current_set()
        results = list(session.test_results)
        passed = session.finish_set()

        if session.mode is SessionMode.TEST:
            await self.streak_use_case.update_test_streaks(username, profile_name, results)
        elif session.mode is SessionMode.REPEAT:
            await self.streak_use_case.update_repeat_streaks(username, profile_name, results)
        elif passed:
            for card in tested_cards:
                stored = await self.card_repository.get_card_by_word_name(
                    username, profile_name, card.word_name
                )
                if stored is None:
                    raise CardNotFoundError(card.word_name)
                streak = StreakPolicy.next_streak(stored.streak, True, StreakMode.TEST)
                await self.card_repository.update_card_streak(
                    username, profile_name, card.word_name, streak
                )

        for event in session.collect_events():
            logger.info(
                "learning_session_event",
                username=username,
                profile=profile_name,
                mode=str(session.mode),
                **event.to_dict(),
            )
        return passed

    async def _get_card_settings(self, username: str, profile_name: str) -> CardSettings:
        settings = await self.card_repository.get_card_settings(username, profile_name)
        if settings is None:
            raise ProfileNotFoundError(username, profile_name)
        return settings

    @staticmethod
    def _shuffled_test_run(
        cards: list[Card],
        settings: CardSettings,
        mode: SessionMode,
        rng: random.Random | None,
    ) -> LearningSession:
        shuffled = list(cards)
        (rng or random.Random()).shuffle(shuffled)
        return LearningSession.create_test_run(shuffled, settings.test_method, mode)
