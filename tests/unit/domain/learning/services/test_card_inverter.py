"""Tests for CardInverter domain service."""

import copy
from collections.abc import Callable

from langhelper.domain.learning.entities import Card, CardType, Meaning
from langhelper.domain.learning.services import CardInverter


def _eat_card(make_card: Callable[..., Card]) -> Card:
    return make_card(
        "食べる",
        meanings=[
            Meaning(definition="to eat", translated_definition="comer", word_translations=("eat",))
        ],
    )


class TestCardInverter:
    def test_inverts_straight_card_into_reverse_card(
        self, make_card: Callable[..., Card]
    ) -> None:
        source = _eat_card(make_card)
        before = copy.deepcopy(source)

        (inverse,) = CardInverter().invert(source)

        assert inverse.card_type is CardType.REVERSE
        assert inverse.word_name == "eat"
        assert inverse.meanings == [
            Meaning(definition="comer", translated_definition="to eat", word_translations=("食べる",))
        ]
        assert inverse.streak == 0
        assert inverse.id is None
        assert source == before

    def test_reverse_card_inverts_to_straight(self, make_card: Callable[..., Card]) -> None:
        source = make_card("eat", card_type=CardType.REVERSE, translations=("comer",))

        (inverse,) = CardInverter().invert(source)

        assert inverse.card_type is CardType.STRAIGHT

    def test_merges_into_existing_card_without_touching_it(
        self, make_card: Callable[..., Card]
    ) -> None:
        existing = make_card("eat", card_type=CardType.REVERSE, translations=("comer",), streak=3)
        before = copy.deepcopy(existing)

        (merged,) = CardInverter().invert(_eat_card(make_card), {"eat": existing})

        assert merged.streak == 3
        assert len(merged.meanings) == 2
        assert merged.meanings[-1].word_translations == ("食べる",)
        assert existing == before

    def test_word_names_match_case_sensitively(self, make_card: Callable[..., Card]) -> None:
        existing = make_card("Eat", card_type=CardType.REVERSE, translations=("comer",))

        (inverse,) = CardInverter().invert(_eat_card(make_card), {"Eat": existing})

        assert inverse.word_name == "eat"
        assert len(inverse.meanings) == 1

    def test_meanings_sharing_a_translation_build_one_card(
        self, make_card: Callable[..., Card]
    ) -> None:
        source = make_card(
            "banco",
            meanings=[
                Meaning("financial institution", "institución financiera", ("bank",)),
                Meaning("long seat", "asiento largo", ("bench", "bank")),
            ],
        )

        inverse = CardInverter().invert(source)

        assert [card.word_name for card in inverse] == ["bank", "bench"]
        assert [m.definition for m in inverse[0].meanings] == [
            "institución financiera",
            "asiento largo",
        ]
        assert inverse[1].meanings[0].word_translations == ("banco",)

    def test_blank_translations_are_skipped(self, make_card: Callable[..., Card]) -> None:
        source = make_card("hola", translations=("", "  ", "hello"))

        inverse = CardInverter().invert(source)

        assert [card.word_name for card in inverse] == ["hello"]

    def test_card_without_translations_yields_nothing(
        self, make_card: Callable[..., Card]
    ) -> None:
        assert CardInverter().invert(make_card("hola", translations=())) == []

    def test_translations_of_deduplicates_in_order(self, make_card: Callable[..., Card]) -> None:
        source = make_card("comer", translations=("eat", " ", "dine", "eat"))

        assert CardInverter.translations_of(source) == ["eat", "dine"]
