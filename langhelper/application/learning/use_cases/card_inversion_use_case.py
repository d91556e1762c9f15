"""Use case for deriving and saving reverse-direction cards."""

from collections.abc import Iterable

import structlog

from langhelper.application.learning.protocols.card_repository import CardRepositoryProtocol
from langhelper.domain.learning.entities.card import Card
from langhelper.domain.learning.services.card_inverter import CardInverter

logger = structlog.get_logger(__name__)


class CardInversionUseCase:
    """Builds inverse cards for review and saves the reviewed ones."""

    def __init__(
        self,
        card_repository: CardRepositoryProtocol,
        card_inverter: CardInverter | None = None,
    ) -> None:
        """Initialize use case with the card repository and inverter."""
        self.card_repository = card_repository
        self.card_inverter = card_inverter or CardInverter()

    async def get_inverted_cards(
        self,
        username: str,
        profile_name: str,
        card: Card,
        pending_cards: Iterable[Card] = (),
    ) -> list[Card]:
        """
        Derive unsaved inverse cards from a card.

        Args:
            username: Owner of the profile
            profile_name: Profile holding the cards
            card: Source card; it is never modified
            pending_cards: Cards already waiting for review, matched by word
                name before the card store is consulted

        Returns:
            New and merged inverse cards, pending review
        """
        known: dict[str, Card] = {pending.word_name: pending for pending in pending_cards}
        for translation in self.card_inverter.translations_of(card):
            if translation in known:
                continue
            stored = await self.card_repository.get_card_by_word_name(
                username, profile_name, translation
            )
            if stored is not None:
                known[translation] = stored

        inverted = self.card_inverter.invert(card, known)
        logger.info(
            "inverted_card",
            username=username,
            profile=profile_name,
            word=card.word_name,
            inverse_cards=len(inverted),
            merged=sum(1 for inverse in inverted if inverse.word_name in known),
        )
        return inverted

    async def save_inverted_cards(
        self, username: str, profile_name: str, cards: Iterable[Card]
    ) -> list[Card]:
        """Persist reviewed inverse cards (create or update by word name)."""
        saved = [
            await self.card_repository.save_card(username, profile_name, card) for card in cards
        ]
        logger.info(
            "saved_inverted_cards", username=username, profile=profile_name, cards=len(saved)
        )
        return saved
