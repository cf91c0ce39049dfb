"""Application configuration."""

import os
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from supplement_rewards.domain.errors import ValidationError
from supplement_rewards.domain.quiz import QuizDifficulty

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    storage_backend: Literal["memory", "sqlite", "supabase"] = "sqlite"
    data_file: Path = Path("supplement_rewards.db")
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    user_id: str = "local"
    timezone: str = "UTC"
    supplement_catalog_path: Path | None = None
    quiz_bank_path: Path | None = None
    quiz_question_count: int = 5
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_difficulty(raw: str | None) -> QuizDifficulty | None:
    """Parse a difficulty name from user input; empty means any difficulty."""
    if raw is None:
        return None
    cleaned = raw.strip().lower()
    if cleaned in {"", "*", "any", "all"}:
        return None
    for difficulty in QuizDifficulty:
        if difficulty.value.lower() == cleaned:
            return difficulty
    raise ValidationError(f"Unknown quiz difficulty: {raw}")
