"""Pytest configuration and fixtures."""

from collections.abc import Callable, Sequence
from datetime import UTC, datetime, timedelta

import pytest

from langhelper.domain.learning.entities import Card, CardType, Meaning, Word

BASE_TIME = datetime(2024, 1, 1, 9, 0, tzinfo=UTC)


def build_card(
    word_name: str,
    translations: Sequence[str] = ("translation",),
    card_type: CardType = CardType.STRAIGHT,
    streak: int = 0,
    minute: int = 0,
    meanings: Sequence[Meaning] | None = None,
) -> Card:
    """Build an unsaved card created `minute` minutes after BASE_TIME."""
    if meanings is None:
        meanings = [
            Meaning(
                definition=f"definition of {word_name}",
                translated_definition=f"translated definition of {word_name}",
                word_translations=tuple(translations),
            )
        ]
    return Card(
        card_type=card_type,
        word=Word(name=word_name),
        meanings=list(meanings),
        streak=streak,
        created_at=BASE_TIME + timedelta(minutes=minute),
    )


def numbered_cards(count: int, streak: int = 0) -> list[Card]:
    """Cards word0..wordN-1 with translations translation0..N-1, oldest first."""
    return [
        build_card(f"word{i}", translations=(f"translation{i}",), streak=streak, minute=i)
        for i in range(count)
    ]


@pytest.fixture
def make_card() -> Callable[..., Card]:
    return build_card


@pytest.fixture
def make_cards() -> Callable[..., list[Card]]:
    return numbered_cards
