"""
Configuration settings for fraction-trainer.

Uses Pydantic Settings for environment variable management with .env file support.
Variables use the FRACTION_TRAINER_ prefix, e.g. FRACTION_TRAINER_LOG_LEVEL=DEBUG.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="FRACTION_TRAINER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Storage
    # ========================================
    progress_dir: Path = Field(
        default=Path.home() / ".fraction_trainer" / "progress",
        description="Directory of the JSON progress store (one file per learner)",
    )
    problem_bank_file: Path | None = Field(
        default=None,
        description="JSON problem bank to use instead of the built-in problems",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging verbosity level",
    )
    log_file: str | None = Field(
        default=None,
        description="Log file path (None for stderr only)",
    )

    # ========================================
    # Adaptive Difficulty
    # ========================================
    difficulty_window: int = Field(
        default=5,
        ge=1,
        description="Recent attempts per skill used for the difficulty signal",
    )
    difficulty_min_attempts: int = Field(
        default=3,
        ge=1,
        description="Samples needed before the signal leaves 'maintain'",
    )
    increase_min_accuracy: float = Field(
        default=85.0,
        ge=0.0,
        le=100.0,
        description="Window accuracy (%) at or above which difficulty increases",
    )
    increase_max_hints: float = Field(
        default=1.0,
        ge=0.0,
        description="Average hints at or below which difficulty may increase",
    )
    decrease_max_accuracy: float = Field(
        default=60.0,
        ge=0.0,
        le=100.0,
        description="Window accuracy (%) below which difficulty decreases",
    )
    decrease_min_hints: float = Field(
        default=3.0,
        ge=0.0,
        description="Average hints above which difficulty decreases",
    )

    # ========================================
    # Practice
    # ========================================
    default_difficulty: int = Field(
        default=1,
        ge=1,
        le=5,
        description="Starting difficulty for a learner without history",
    )
    default_learner: str = Field(
        default="default",
        description="Learner id used when none is given on the command line",
    )
    random_seed: int | None = Field(
        default=None,
        description="Seed for reproducible problem selection",
    )

    @model_validator(mode="after")
    def _check_window(self) -> Settings:
        if self.difficulty_min_attempts > self.difficulty_window:
            raise ValueError("difficulty_min_attempts cannot exceed difficulty_window")
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
