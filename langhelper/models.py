"""Database models."""

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from langhelper.database import Base


class Profile(Base):
    """Learning profile of a user, holding its card settings."""

    __tablename__ = "profiles"
    __table_args__ = (UniqueConstraint("username", "name", name="uq_profiles_username_name"),)

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    username: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    cards_per_set: Mapped[int] = mapped_column(Integer, nullable=False, default=10)
    test_method: Mapped[str] = mapped_column(String(20), nullable=False, default="manual")
    streak_threshold: Mapped[int] = mapped_column(Integer, nullable=False, default=5)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False
    )

    cards: Mapped[list["Card"]] = relationship(
        back_populates="profile", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        """String representation of Profile."""
        return f"<Profile(id={self.id}, username='{self.username}', name='{self.name}')>"


class Card(Base):
    """Vocabulary card; readings and meanings are stored as JSON."""

    __tablename__ = "cards"
    __table_args__ = (
        UniqueConstraint("profile_id", "word_name", name="uq_cards_profile_word_name"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    profile_id: Mapped[int] = mapped_column(
        ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    card_type: Mapped[str] = mapped_column(String(20), nullable=False)
    word_name: Mapped[str] = mapped_column(String(200), nullable=False)
    readings: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    meanings: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    streak: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False, index=True
    )

    profile: Mapped[Profile] = relationship(back_populates="cards")

    def __repr__(self) -> str:
        """String representation of Card."""
        return f"<Card(id={self.id}, word_name='{self.word_name}', streak={self.streak})>"
