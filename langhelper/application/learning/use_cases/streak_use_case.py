"""Use case for persisting streak outcomes of test and repeat runs."""

from collections.abc import Iterable

import structlog

from langhelper.application.learning.protocols.card_repository import CardRepositoryProtocol
from langhelper.application.learning.use_cases.exceptions import CardNotFoundError
from langhelper.domain.learning.entities.test_result import TestResult
from langhelper.domain.learning.services.streak_policy import StreakMode, StreakPolicy

logger = structlog.get_logger(__name__)


class StreakUseCase:
    """Applies test results to card streaks in the card store."""

    def __init__(self, card_repository: CardRepositoryProtocol) -> None:
        """Initialize use case with the card repository."""
        self.card_repository = card_repository

    async def update_test_streaks(
        self, username: str, profile_name: str, results: Iterable[TestResult]
    ) -> dict[str, int]:
        """
        Persist the results of a test run over unlearned cards.

        A correct answer increments the streak, a wrong one resets it to 0.

        Returns:
            New streak per word name

        Raises:
            CardNotFoundError: If a tested card is gone from the store
        """
        return await self._apply(username, profile_name, results, StreakMode.TEST)

    async def update_repeat_streaks(
        self, username: str, profile_name: str, results: Iterable[TestResult]
    ) -> dict[str, int]:
        """
        Persist the results of a repeat run over learned cards.

        A correct answer keeps the streak, a wrong one resets it to 0 so the
        card is studied again.
        """
        return await self._apply(username, profile_name, results, StreakMode.REPEAT)

    async def _apply(
        self,
        username: str,
        profile_name: str,
        results: Iterable[TestResult],
        mode: StreakMode,
    ) -> dict[str, int]:
        updated: dict[str, int] = {}
        for result in results:
            card = await self.card_repository.get_card_by_word_name(
                username, profile_name, result.word_name
            )
            if card is None:
                raise CardNotFoundError(result.word_name)

            streak = StreakPolicy.next_streak(card.streak, result.is_correct, mode)
            if streak != card.streak:
                # Absolute value, so writing it twice is harmless
                await self.card_repository.update_card_streak(
                    username, profile_name, result.word_name, streak
                )
            updated[result.word_name] = streak

        logger.info(
            "updated_streaks",
            username=username,
            profile=profile_name,
            mode=str(mode),
            cards=len(updated),
            reset=sum(1 for streak in updated.values() if streak == 0),
        )
        return updated
