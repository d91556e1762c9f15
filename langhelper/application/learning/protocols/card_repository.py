"""Protocol for the card store used by the learning context."""

from typing import Protocol

from langhelper.domain.learning.entities.card import Card
from langhelper.domain.learning.entities.card_settings import CardSettings


class CardRepositoryProtocol(Protocol):
    """
    Async card store capability, scoped by user and profile.

    Implementations raise RepositoryError on I/O failure.
    """

    async def get_card_settings(self, username: str, profile_name: str) -> CardSettings | None:
        """
        Get the card settings of a profile.

        Returns:
            CardSettings, or None if the profile does not exist
        """
        ...

    async def get_unlearned_cards(self, username: str, profile_name: str) -> list[Card]:
        """
        Get cards whose streak is below the profile's streak threshold.

        Returns:
            List of cards ordered by created_at ascending
        """
        ...

    async def get_learned_cards(self, username: str, profile_name: str) -> list[Card]:
        """
        Get cards whose streak reached the profile's streak threshold.

        Returns:
            List of cards ordered by created_at ascending
        """
        ...

    async def get_card_by_word_name(
        self, username: str, profile_name: str, word_name: str
    ) -> Card | None:
        """
        Find a card by its exact word name.

        Returns:
            Card if found, None otherwise
        """
        ...

    async def update_card_streak(
        self, username: str, profile_name: str, word_name: str, streak: int
    ) -> None:
        """
        Set the streak of a card to an absolute value.

        Writing the same value twice leaves the card unchanged.
        """
        ...

    async def save_card(self, username: str, profile_name: str, card: Card) -> Card:
        """
        Save a card (create or update, keyed by word name).

        Returns:
            Saved card with store-generated values
        """
        ...
