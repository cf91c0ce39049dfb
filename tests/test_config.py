"""Tests for configuration parsing."""

import pytest

from supplement_rewards.config import Settings, parse_difficulty
from supplement_rewards.domain.errors import ValidationError
from supplement_rewards.domain.quiz import QuizDifficulty


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Easy", QuizDifficulty.EASY),
        (" hard ", QuizDifficulty.HARD),
        ("MEDIUM", QuizDifficulty.MEDIUM),
        (None, None),
        ("", None),
        ("any", None),
    ],
)
def test_parse_difficulty(raw, expected) -> None:
    assert parse_difficulty(raw) is expected


def test_parse_difficulty_rejects_unknown() -> None:
    with pytest.raises(ValidationError):
        parse_difficulty("impossible")


def test_settings_read_environment(monkeypatch) -> None:
    monkeypatch.setenv("STORAGE_BACKEND", "memory")
    monkeypatch.setenv("QUIZ_QUESTION_COUNT", "3")

    settings = Settings()

    assert settings.storage_backend == "memory"
    assert settings.quiz_question_count == 3
    assert settings.user_id == "local"
