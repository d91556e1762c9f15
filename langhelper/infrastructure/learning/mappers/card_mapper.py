"""Mapper for Card ORM ↔ Domain conversion."""

from datetime import UTC, datetime
from typing import Any

from langhelper.domain.common.value_objects import CardId
from langhelper.domain.learning.entities.card import Card, CardType, Meaning, Word
from langhelper.domain.learning.entities.card_settings import AnswerMethod, CardSettings
from langhelper.models import Card as CardORM
from langhelper.models import Profile as ProfileORM


class CardMapper:
    """Mapper for Card ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: CardORM) -> Card:
        """Convert ORM model to domain entity."""
        return Card.create_with_id(
            id=CardId(orm_model.id),
            card_type=CardType.parse(orm_model.card_type),
            word=Word(name=orm_model.word_name, readings=tuple(orm_model.readings or ())),
            meanings=[self._meaning_to_domain(data) for data in orm_model.meanings],
            streak=orm_model.streak,
            created_at=_as_utc(orm_model.created_at),
        )

    def to_orm(
        self, domain_entity: Card, profile_id: int, orm_model: CardORM | None = None
    ) -> CardORM:
        """Convert domain entity to ORM model."""
        meanings = [self._meaning_to_orm(meaning) for meaning in domain_entity.meanings]
        if orm_model:
            # Update existing; created_at is left alone so study order is stable
            orm_model.card_type = str(domain_entity.card_type)
            orm_model.word_name = domain_entity.word_name
            orm_model.readings = list(domain_entity.word.readings)
            orm_model.meanings = meanings
            orm_model.streak = domain_entity.streak
            return orm_model

        # Create new
        return CardORM(
            profile_id=profile_id,
            card_type=str(domain_entity.card_type),
            word_name=domain_entity.word_name,
            readings=list(domain_entity.word.readings),
            meanings=meanings,
            streak=domain_entity.streak,
            created_at=domain_entity.created_at,
        )

    def settings_to_domain(self, profile: ProfileORM) -> CardSettings:
        """Convert a profile row to its card settings."""
        return CardSettings(
            cards_per_set=profile.cards_per_set,
            test_method=AnswerMethod.parse(profile.test_method),
            streak_threshold=profile.streak_threshold,
        )

    @staticmethod
    def _meaning_to_domain(data: dict[str, Any]) -> Meaning:
        return Meaning(
            definition=data["definition"],
            translated_definition=data["translated_definition"],
            word_translations=tuple(data.get("word_translations", ())),
        )

    @staticmethod
    def _meaning_to_orm(meaning: Meaning) -> dict[str, Any]:
        return {
            "definition": meaning.definition,
            "translated_definition": meaning.translated_definition,
            "word_translations": list(meaning.word_translations),
        }


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value
