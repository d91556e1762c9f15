"""
Card entity and its value objects for vocabulary learning.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum

from langhelper.domain.common.entity import Entity
from langhelper.domain.common.exceptions import ValidationError
from langhelper.domain.common.value_object import ValueObject
from langhelper.domain.common.value_objects import CardId

MAX_WORD_LENGTH = 200
MAX_DEFINITION_LENGTH = 1000


class CardType(StrEnum):
    """Direction of study for a card."""

    # target language -> native language
    STRAIGHT = "straight"
    # native language -> target language
    REVERSE = "reverse"

    @classmethod
    def parse(cls, value: str) -> "CardType":
        """Parse a card type name, ignoring case."""
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValidationError(
                f"Invalid card type: {value}. Must be 'straight' or 'reverse'",
                field="card_type",
                value=value,
            ) from None

    def opposite(self) -> "CardType":
        if self is CardType.STRAIGHT:
            return CardType.REVERSE
        return CardType.STRAIGHT


@dataclass(frozen=True)
class Word(ValueObject):
    """
    The word being learned.

    Business Rules:
    - Name cannot be empty and is limited to 200 characters
    - Readings are optional pronunciation hints
    """

    name: str
    readings: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError("Word name cannot be empty", field="name")
        if len(self.name) > MAX_WORD_LENGTH:
            raise ValidationError(
                f"Word name cannot exceed {MAX_WORD_LENGTH} characters", field="name"
            )
        object.__setattr__(self, "readings", tuple(self.readings))


@dataclass(frozen=True)
class Meaning(ValueObject):
    """
    One meaning of a word.

    Business Rules:
    - Definition and translated definition cannot be empty
    - Both are limited to 1000 characters
    - Word translations may repeat and may be empty
    """

    definition: str
    translated_definition: str
    word_translations: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        for field_name in ("definition", "translated_definition"):
            value: str = getattr(self, field_name)
            label = field_name.replace("_", " ").capitalize()
            if not value or not value.strip():
                raise ValidationError(f"{label} cannot be empty", field=field_name)
            if len(value) > MAX_DEFINITION_LENGTH:
                raise ValidationError(
                    f"{label} cannot exceed {MAX_DEFINITION_LENGTH} characters",
                    field=field_name,
                )
        object.__setattr__(self, "word_translations", tuple(self.word_translations))

    def inverted(self, source_word_name: str) -> "Meaning":
        """Swap the definitions and point the translation back at the source word."""
        return Meaning(
            definition=self.translated_definition,
            translated_definition=self.definition,
            word_translations=(source_word_name,),
        )


@dataclass
class Card(Entity[CardId]):
    """
    Vocabulary card.

    Business Rules:
    - A card has at least one meaning
    - Streak is never negative
    - The id stays None until the card store assigns one
    """

    card_type: CardType
    word: Word
    meanings: list[Meaning]
    streak: int = 0
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    id: CardId | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        self.meanings = list(self.meanings)
        if not self.meanings:
            raise ValidationError("Card must have at least one meaning", field="meanings")
        if self.streak < 0:
            raise ValidationError("Streak cannot be negative", field="streak", value=self.streak)

    @property
    def word_name(self) -> str:
        return self.word.name

    def increment_streak(self) -> None:
        self.streak += 1

    def reset_streak(self) -> None:
        self.streak = 0

    def update_streak(self, streak: int) -> None:
        """
        Set the streak to an explicit value.

        Raises:
            ValidationError: If streak is negative
        """
        if streak < 0:
            raise ValidationError("Streak cannot be negative", field="streak", value=streak)
        self.streak = streak

    def is_learned(self, streak_threshold: int) -> bool:
        return self.streak >= streak_threshold

    def add_meaning(self, meaning: Meaning) -> None:
        self.meanings.append(meaning)

    def acceptable_answers(self) -> list[str]:
        """All word translations across meanings, in order (both card types)."""
        return [
            translation
            for meaning in self.meanings
            for translation in meaning.word_translations
        ]

    def required_answer_count(self) -> int:
        """
        Number of correct answers needed before the card counts as answered.

        Straight cards need one answer for every meaning that has translations,
        reverse cards need every translation.
        """
        if self.card_type is CardType.STRAIGHT:
            return sum(1 for meaning in self.meanings if meaning.word_translations)
        return sum(len(meaning.word_translations) for meaning in self.meanings)

    def answered_count(self, answers: Sequence[str]) -> int:
        """
        How many of the required answers the given answers fulfil.

        On straight cards each answer covers at most one meaning it translates,
        so two translations of the same meaning count once.
        """
        if self.card_type is CardType.STRAIGHT:
            return self._covered_meaning_count(answers)
        remaining = self.acceptable_answers()
        count = 0
        for answer in answers:
            if answer in remaining:
                remaining.remove(answer)
                count += 1
        return count

    def _covered_meaning_count(self, answers: Sequence[str]) -> int:
        # Maximum matching of answers onto meanings (augmenting paths)
        owners: dict[int, int] = {}

        def assign(answer_index: int, seen: set[int]) -> bool:
            for meaning_index, meaning in enumerate(self.meanings):
                if meaning_index in seen or answers[answer_index] not in meaning.word_translations:
                    continue
                seen.add(meaning_index)
                if meaning_index not in owners or assign(owners[meaning_index], seen):
                    owners[meaning_index] = answer_index
                    return True
            return False

        return sum(1 for index in range(len(answers)) if assign(index, set()))

    @classmethod
    def create(
        cls,
        card_type: CardType,
        word: Word,
        meanings: list[Meaning],
    ) -> "Card":
        """Create a new card (no id, zero streak, created now)."""
        return cls(
            card_type=card_type,
            word=word,
            meanings=meanings,
            streak=0,
            created_at=datetime.now(UTC),
        )

    @classmethod
    def create_with_id(
        cls,
        id: CardId,
        card_type: CardType,
        word: Word,
        meanings: list[Meaning],
        streak: int,
        created_at: datetime,
    ) -> "Card":
        """Reconstitute a card from persistence."""
        return cls(
            id=id,
            card_type=card_type,
            word=word,
            meanings=meanings,
            streak=streak,
            created_at=created_at,
        )
