"""Fixtures for application use case tests."""

import copy
from collections.abc import Callable, Iterable

import pytest

from langhelper.application.learning.use_cases.exceptions import CardNotFoundError
from langhelper.domain.common.value_objects import CardId
from langhelper.domain.learning.entities import Card, CardSettings


class FakeCardRepository:
    """In-memory card store for one profile; hands out copies like a real store."""

    def __init__(
        self, settings: CardSettings | None = None, cards: Iterable[Card] = ()
    ) -> None:
        self.settings = settings
        # Kept in insertion order, which need not be creation order
        self.cards: dict[str, Card] = {}
        self.streak_writes: list[tuple[str, int]] = []
        self._next_id = 1
        for card in cards:
            self._store(card)

    async def get_card_settings(self, username: str, profile_name: str) -> CardSettings | None:
        return self.settings

    async def get_unlearned_cards(self, username: str, profile_name: str) -> list[Card]:
        threshold = self._threshold()
        return [copy.deepcopy(c) for c in self.cards.values() if c.streak < threshold]

    async def get_learned_cards(self, username: str, profile_name: str) -> list[Card]:
        threshold = self._threshold()
        return [copy.deepcopy(c) for c in self.cards.values() if c.streak >= threshold]

    async def get_card_by_word_name(
        self, username: str, profile_name: str, word_name: str
    ) -> Card | None:
        card = self.cards.get(word_name)
        return copy.deepcopy(card) if card else None

    async def update_card_streak(
        self, username: str, profile_name: str, word_name: str, streak: int
    ) -> None:
        if word_name not in self.cards:
            raise CardNotFoundError(word_name)
        self.cards[word_name].update_streak(streak)
        self.streak_writes.append((word_name, streak))

    async def save_card(self, username: str, profile_name: str, card: Card) -> Card:
        return copy.deepcopy(self._store(card))

    def _store(self, card: Card) -> Card:
        stored = copy.deepcopy(card)
        existing = self.cards.get(card.word_name)
        if existing is not None:
            stored.id = existing.id
        elif stored.id is None:
            stored.id = CardId(self._next_id)
            self._next_id += 1
        self.cards[card.word_name] = stored
        return stored

    def _threshold(self) -> int:
        return (self.settings or CardSettings()).streak_threshold


@pytest.fixture
def fake_repository_factory() -> Callable[..., FakeCardRepository]:
    def factory(
        cards: Iterable[Card] = (), settings: CardSettings | None = CardSettings()
    ) -> FakeCardRepository:
        return FakeCardRepository(settings=settings, cards=cards)

    return factory
