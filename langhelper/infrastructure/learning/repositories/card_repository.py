"""SQLAlchemy implementation of the card repository."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from sqlalchemy import Select, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from langhelper.application.learning.use_cases.exceptions import (
    CardNotFoundError,
    ProfileNotFoundError,
)
from langhelper.domain.learning.entities.card import Card
from langhelper.domain.learning.entities.card_settings import CardSettings
from langhelper.exceptions import RepositoryError
from langhelper.infrastructure.learning.mappers.card_mapper import CardMapper
from langhelper.models import Card as CardORM
from langhelper.models import Profile as ProfileORM

logger = structlog.get_logger(__name__)


class SqlAlchemyCardRepository:
    """Domain-centric card repository backed by an async SQLAlchemy session."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db
        self.mapper = CardMapper()

    async def create_profile(
        self, username: str, profile_name: str, settings: CardSettings | None = None
    ) -> CardSettings:
        """
        Create a profile with the given (or default) card settings.

        Returns:
            Card settings of the new profile
        """
        settings = settings or CardSettings()
        async with self._translate_errors("create_profile"):
            profile = ProfileORM(
                username=username,
                name=profile_name,
                cards_per_set=settings.cards_per_set,
                test_method=str(settings.test_method),
                streak_threshold=settings.streak_threshold,
            )
            self.db.add(profile)
            await self.db.commit()

        logger.info("created_profile", username=username, profile=profile_name)
        return settings

    async def get_card_settings(self, username: str, profile_name: str) -> CardSettings | None:
        async with self._translate_errors("get_card_settings"):
            profile = await self._find_profile(username, profile_name)
        return self.mapper.settings_to_domain(profile) if profile else None

    async def get_unlearned_cards(self, username: str, profile_name: str) -> list[Card]:
        """
        Get cards below the profile's streak threshold.

        Returns:
            List of card entities ordered by created_at ASC
        """
        stmt = self._cards_of(username, profile_name).where(
            CardORM.streak < ProfileORM.streak_threshold
        )
        return await self._fetch_cards(stmt, "get_unlearned_cards")

    async def get_learned_cards(self, username: str, profile_name: str) -> list[Card]:
        """
        Get cards at or above the profile's streak threshold.

        Returns:
            List of card entities ordered by created_at ASC
        """
        stmt = self._cards_of(username, profile_name).where(
            CardORM.streak >= ProfileORM.streak_threshold
        )
        return await self._fetch_cards(stmt, "get_learned_cards")

    async def get_card_by_word_name(
        self, username: str, profile_name: str, word_name: str
    ) -> Card | None:
        async with self._translate_errors("get_card_by_word_name"):
            orm_model = await self._find_card(username, profile_name, word_name)
        return self.mapper.to_domain(orm_model) if orm_model else None

    async def update_card_streak(
        self, username: str, profile_name: str, word_name: str, streak: int
    ) -> None:
        """
        Set the streak of a card.

        Raises:
            CardNotFoundError: If no card has this word name in the profile
        """
        async with self._translate_errors("update_card_streak"):
            orm_model = await self._find_card(username, profile_name, word_name)
            if orm_model is None:
                raise CardNotFoundError(word_name)
            orm_model.streak = streak
            await self.db.commit()

        logger.debug(
            "updated_card_streak",
            username=username,
            profile=profile_name,
            word=word_name,
            streak=streak,
        )

    async def save_card(self, username: str, profile_name: str, card: Card) -> Card:
        """
        Save a card entity (create or update, keyed by word name).

        Returns:
            Saved card entity with database-generated values

        Raises:
            ProfileNotFoundError: If the profile does not exist
        """
        async with self._translate_errors("save_card"):
            profile = await self._find_profile(username, profile_name)
            if profile is None:
                raise ProfileNotFoundError(username, profile_name)

            orm_model = await self._find_card(username, profile_name, card.word_name)
            if orm_model is None:
                # Create new
                orm_model = self.mapper.to_orm(card, profile.id)
                self.db.add(orm_model)
            else:
                # Update existing
                self.mapper.to_orm(card, profile.id, orm_model)
            await self.db.commit()
            await self.db.refresh(orm_model)

        return self.mapper.to_domain(orm_model)

    async def _find_profile(self, username: str, profile_name: str) -> ProfileORM | None:
        stmt = select(ProfileORM).where(
            ProfileORM.username == username, ProfileORM.name == profile_name
        )
        return (await self.db.execute(stmt)).scalar_one_or_none()

    async def _find_card(
        self, username: str, profile_name: str, word_name: str
    ) -> CardORM | None:
        stmt = self._cards_of(username, profile_name).where(CardORM.word_name == word_name)
        return (await self.db.execute(stmt)).scalar_one_or_none()

    @staticmethod
    def _cards_of(username: str, profile_name: str) -> Select[tuple[CardORM]]:
        return (
            select(CardORM)
            .join(ProfileORM, CardORM.profile_id == ProfileORM.id)
            .where(ProfileORM.username == username, ProfileORM.name == profile_name)
            .order_by(CardORM.created_at.asc(), CardORM.id.asc())
        )

    async def _fetch_cards(self, stmt: Select[tuple[CardORM]], operation: str) -> list[Card]:
        async with self._translate_errors(operation):
            orm_models = (await self.db.execute(stmt)).scalars().all()
        return [self.mapper.to_domain(orm) for orm in orm_models]

    @asynccontextmanager
    async def _translate_errors(self, operation: str) -> AsyncIterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("card_store_failed", operation=operation, error=str(e))
            raise RepositoryError(f"Card store failed during {operation}") from e
