"""
Configuration settings for gentle-study.

Uses Pydantic Settings for environment variable management with .env file support.
Engine functions take these values as explicit arguments; only entry points
(the CLI) read them from here.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="GENTLE_STUDY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: str = Field(
        default="WARNING",
        description="Loguru level for the stderr sink",
    )

    # ========================================
    # Spaced repetition
    # ========================================
    review_hour: int = Field(
        default=10,
        ge=0,
        le=23,
        description="Local hour at which every scheduled review is placed",
    )
    default_policy: Literal["lector", "sm2"] = Field(
        default="lector",
        description="Interval policy used when completing a review",
    )
    interference_window: int = Field(
        default=10,
        ge=1,
        description="How many recently studied concepts count toward semantic interference",
    )

    # ========================================
    # Fatigue & interleaving
    # ========================================
    fatigue_window: int = Field(
        default=5,
        ge=2,
        description="Number of most recent samples used for fatigue trends",
    )
    max_interleaved_topics: int = Field(
        default=3,
        ge=1,
        le=3,
        description="Upper bound on topics interleaved in one session",
    )

    def get_engine_config(self) -> dict[str, object]:
        """Return the engine tunables as keyword arguments."""
        return {
            "review_hour": self.review_hour,
            "policy": self.default_policy,
            "interference_window": self.interference_window,
            "fatigue_window": self.fatigue_window,
            "max_topics": self.max_interleaved_topics,
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
