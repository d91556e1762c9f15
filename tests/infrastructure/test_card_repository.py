"""Tests for SqlAlchemyCardRepository against in-memory SQLite."""

from collections.abc import Callable
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from langhelper.application.learning.protocols import CardRepositoryProtocol
from langhelper.application.learning.use_cases import (
    CardNotFoundError,
    LearningSessionUseCase,
    ProfileNotFoundError,
)
from langhelper.core import Container
from langhelper.domain.learning.entities import (
    AnswerMethod,
    Card,
    CardSettings,
    CardType,
    Meaning,
    Word,
)
from langhelper.exceptions import RepositoryError
from langhelper.infrastructure.learning.repositories import SqlAlchemyCardRepository

USER = "ana"
PROFILE = "spanish"


class TestProfiles:
    def test_satisfies_protocol(self, card_repository: SqlAlchemyCardRepository) -> None:
        repository: CardRepositoryProtocol = card_repository
        assert repository is card_repository

    @pytest.mark.asyncio
    async def test_create_profile_and_read_settings(
        self, card_repository: SqlAlchemyCardRepository
    ) -> None:
        settings = CardSettings(
            cards_per_set=7, test_method=AnswerMethod.SELF_REVIEW, streak_threshold=3
        )
        await card_repository.create_profile(USER, PROFILE, settings)

        assert await card_repository.get_card_settings(USER, PROFILE) == settings

    @pytest.mark.asyncio
    async def test_missing_profile_has_no_settings(
        self, card_repository: SqlAlchemyCardRepository
    ) -> None:
        await card_repository.create_profile(USER, PROFILE)

        assert await card_repository.get_card_settings(USER, "german") is None
        assert await card_repository.get_card_settings("ben", PROFILE) is None

    @pytest.mark.asyncio
    async def test_duplicate_profile(self, card_repository: SqlAlchemyCardRepository) -> None:
        await card_repository.create_profile(USER, PROFILE)

        with pytest.raises(RepositoryError):
            await card_repository.create_profile(USER, PROFILE)


class TestCards:
    @pytest.mark.asyncio
    async def test_save_and_load_card(
        self, card_repository: SqlAlchemyCardRepository, make_card: Callable[..., Card]
    ) -> None:
        await card_repository.create_profile(USER, PROFILE)
        card = make_card(
            "食べる",
            meanings=[Meaning("to eat", "comer", ("eat", "dine"))],
        )
        card.word = Word(name="食べる", readings=("たべる",))

        saved = await card_repository.save_card(USER, PROFILE, card)
        loaded = await card_repository.get_card_by_word_name(USER, PROFILE, "食べる")

        assert saved.id is not None
        assert loaded is not None
        assert loaded.id == saved.id
        assert loaded.word.readings == ("たべる",)
        assert loaded.meanings == card.meanings
        assert loaded.card_type is CardType.STRAIGHT
        assert loaded.created_at == card.created_at

    @pytest.mark.asyncio
    async def test_save_card_updates_by_word_name(
        self, card_repository: SqlAlchemyCardRepository, make_card: Callable[..., Card]
    ) -> None:
        await card_repository.create_profile(USER, PROFILE)
        first = await card_repository.save_card(USER, PROFILE, make_card("banco", ("bank",)))
        card = make_card("banco", ("bank",))
        card.add_meaning(Meaning("long seat", "asiento largo", ("bench",)))

        second = await card_repository.save_card(USER, PROFILE, card)

        assert second.id == first.id
        assert second.acceptable_answers() == ["bank", "bench"]

    @pytest.mark.asyncio
    async def test_save_card_requires_profile(
        self, card_repository: SqlAlchemyCardRepository, make_card: Callable[..., Card]
    ) -> None:
        with pytest.raises(ProfileNotFoundError):
            await card_repository.save_card(USER, PROFILE, make_card("hola"))

    @pytest.mark.asyncio
    async def test_learned_and_unlearned_split_by_threshold(
        self, card_repository: SqlAlchemyCardRepository, make_card: Callable[..., Card]
    ) -> None:
        await card_repository.create_profile(USER, PROFILE, CardSettings(streak_threshold=3))
        for card in [
            make_card("tarde", minute=20, streak=1),
            make_card("hola", minute=0, streak=0),
            make_card("viejo", minute=5, streak=3),
            make_card("gracias", minute=10, streak=2),
            make_card("antiguo", minute=1, streak=8),
        ]:
            await card_repository.save_card(USER, PROFILE, card)

        unlearned = await card_repository.get_unlearned_cards(USER, PROFILE)
        learned = await card_repository.get_learned_cards(USER, PROFILE)

        assert [c.word_name for c in unlearned] == ["hola", "gracias", "tarde"]
        assert [c.word_name for c in learned] == ["antiguo", "viejo"]

    @pytest.mark.asyncio
    async def test_cards_are_scoped_to_profile(
        self, card_repository: SqlAlchemyCardRepository, make_card: Callable[..., Card]
    ) -> None:
        await card_repository.create_profile(USER, PROFILE)
        await card_repository.create_profile(USER, "french")
        await card_repository.save_card(USER, PROFILE, make_card("hola", ("hello",)))
        await card_repository.save_card(USER, "french", make_card("bonjour", ("hello",)))

        spanish = await card_repository.get_unlearned_cards(USER, PROFILE)

        assert [c.word_name for c in spanish] == ["hola"]
        assert await card_repository.get_card_by_word_name(USER, "french", "hola") is None

    @pytest.mark.asyncio
    async def test_update_card_streak(
        self, card_repository: SqlAlchemyCardRepository, make_card: Callable[..., Card]
    ) -> None:
        await card_repository.create_profile(USER, PROFILE)
        await card_repository.save_card(USER, PROFILE, make_card("hola"))

        await card_repository.update_card_streak(USER, PROFILE, "hola", 4)
        await card_repository.update_card_streak(USER, PROFILE, "hola", 4)

        card = await card_repository.get_card_by_word_name(USER, PROFILE, "hola")
        assert card is not None
        assert card.streak == 4

    @pytest.mark.asyncio
    async def test_update_streak_of_unknown_card(
        self, card_repository: SqlAlchemyCardRepository
    ) -> None:
        await card_repository.create_profile(USER, PROFILE)

        with pytest.raises(CardNotFoundError):
            await card_repository.update_card_streak(USER, PROFILE, "nada", 1)

    @pytest.mark.asyncio
    async def test_database_errors_become_repository_errors(self) -> None:
        db = AsyncMock(spec=AsyncSession)
        db.execute.side_effect = OperationalError("SELECT", {}, Exception("disk I/O error"))
        repository = SqlAlchemyCardRepository(db)

        with pytest.raises(RepositoryError):
            await repository.get_unlearned_cards(USER, PROFILE)
        db.rollback.assert_awaited_once()


class TestContainerWiring:
    @pytest.mark.asyncio
    async def test_learning_session_over_sqlite(
        self, db_session: AsyncSession, make_cards: Callable[..., list[Card]]
    ) -> None:
        container = Container()
        container.db.override(db_session)
        repository = container.card_repository()
        await repository.create_profile(USER, PROFILE, CardSettings(cards_per_set=2))
        for card in make_cards(3):
            await repository.save_card(USER, PROFILE, card)

        use_case = container.learning_session_use_case()
        assert isinstance(use_case, LearningSessionUseCase)

        session = await use_case.create_learning_session(USER, PROFILE, 1)
        session.start_test_phase()
        session.record_self_review(True)
        session.record_self_review(True)
        assert await use_case.finish_set(USER, PROFILE, session) is True

        word0 = await repository.get_card_by_word_name(USER, PROFILE, "word0")
        word2 = await repository.get_card_by_word_name(USER, PROFILE, "word2")
        assert word0 is not None and word0.streak == 1
        assert word2 is not None and word2.streak == 0
