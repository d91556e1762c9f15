"""
Domain service that derives reverse-direction cards.

This is a pure domain service with no infrastructure dependencies.
"""

import copy
from collections.abc import Mapping

from langhelper.domain.learning.entities.card import Card, Word


class CardInverter:
    """
    Builds inverse cards from a card's meanings, for review before saving.

    Every translation of every meaning becomes (or extends) a card whose
    word is that translation. The inverted meaning swaps the definition
    with the translated definition and translates back to the source word.
    Word names are matched exactly, case included, so "Eat" and "eat"
    stay separate cards.
    """

    def invert(
        self,
        source: Card,
        existing_cards: Mapping[str, Card] | None = None,
    ) -> list[Card]:
        """
        Derive inverse cards from a source card.

        Args:
            source: Card to invert; it is never modified
            existing_cards: Known cards (saved or pending review) by word name;
                a matching card is copied and the new meaning appended to it

        Returns:
            New and merged inverse cards, in order of first appearance
        """
        existing = existing_cards or {}
        inverse_type = source.card_type.opposite()
        inverse_cards: dict[str, Card] = {}

        for meaning in source.meanings:
            inverted = meaning.inverted(source.word_name)
            for translation in meaning.word_translations:
                if not translation.strip():
                    continue

                card = inverse_cards.get(translation)
                if card is not None:
                    card.add_meaning(inverted)
                elif translation in existing:
                    card = copy.deepcopy(existing[translation])
                    card.add_meaning(inverted)
                    inverse_cards[translation] = card
                else:
                    inverse_cards[translation] = Card.create(
                        card_type=inverse_type,
                        word=Word(name=translation),
                        meanings=[inverted],
                    )

        return list(inverse_cards.values())

    @staticmethod
    def translations_of(source: Card) -> list[str]:
        """Distinct non-blank translations of a card, in order of appearance."""
        seen: dict[str, None] = {}
        for translation in source.acceptable_answers():
            if translation.strip():
                seen.setdefault(translation, None)
        return list(seen)
