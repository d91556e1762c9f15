"""Application configuration."""

import logging
import sys
from collections.abc import Callable
from functools import lru_cache
from typing import Any, Literal

import structlog
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from langhelper.domain.learning.entities.card_settings import (
    MAX_CARDS_PER_SET,
    MAX_STREAK_THRESHOLD,
    MIN_CARDS_PER_SET,
    MIN_STREAK_THRESHOLD,
    AnswerMethod,
    CardSettings,
)


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./langhelper.db"
    DATABASE_ECHO: bool = False

    # Environment
    ENVIRONMENT: Literal["development", "production", "test"] = "development"

    # Card settings given to new profiles
    DEFAULT_CARDS_PER_SET: int = 10
    DEFAULT_TEST_METHOD: AnswerMethod = AnswerMethod.MANUAL
    DEFAULT_STREAK_THRESHOLD: int = 5

    @field_validator("DEFAULT_TEST_METHOD", mode="before")
    @classmethod
    def normalize_test_method(cls, value: Any) -> Any:
        """Accept test method names in any case."""
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @model_validator(mode="after")
    def validate_card_defaults(self) -> "Settings":
        """Validate default card settings."""
        if not MIN_CARDS_PER_SET <= self.DEFAULT_CARDS_PER_SET <= MAX_CARDS_PER_SET:
            msg = (
                f"DEFAULT_CARDS_PER_SET must be between {MIN_CARDS_PER_SET} "
                f"and {MAX_CARDS_PER_SET}"
            )
            raise ValueError(msg)
        if not MIN_STREAK_THRESHOLD <= self.DEFAULT_STREAK_THRESHOLD <= MAX_STREAK_THRESHOLD:
            msg = (
                f"DEFAULT_STREAK_THRESHOLD must be between {MIN_STREAK_THRESHOLD} "
                f"and {MAX_STREAK_THRESHOLD}"
            )
            raise ValueError(msg)
        return self

    def default_card_settings(self) -> CardSettings:
        """Card settings for a newly created profile."""
        return CardSettings(
            cards_per_set=self.DEFAULT_CARDS_PER_SET,
            test_method=self.DEFAULT_TEST_METHOD,
            streak_threshold=self.DEFAULT_STREAK_THRESHOLD,
        )


def configure_logging(environment: str = "development") -> None:
    """Configure structured logging with structlog."""
    # Determine if we should use JSON output (production) or console output (dev)
    use_json = environment == "production"

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.DEBUG if environment == "development" else logging.INFO,
    )

    processors: list[Callable[..., Any]] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if use_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
