"""Pydantic request models for the HTTP API."""

from datetime import date, time

from pydantic import BaseModel, Field, model_validator

from supplement_rewards.domain.models import Gender, LifeStage


class TakeSupplementRequest(BaseModel):
    """Body for marking a supplement taken."""

    supplement_name: str | None = None
    day: date | None = None


class ToggleFavoriteRequest(BaseModel):
    """Body for toggling a favorite."""

    timing: str = "morning"


class SpendCoinsRequest(BaseModel):
    """Body for debiting coins."""

    amount: int = Field(gt=0)
    title: str
    related_id: str | None = None


class StartQuizRequest(BaseModel):
    """Body for starting a quiz session."""

    difficulty: str | None = None


class SelectAnswerRequest(BaseModel):
    """Body for selecting a quiz answer."""

    option: str


class UserProfileRequest(BaseModel):
    """Body for creating or updating the user profile."""

    user_name: str
    email: str
    age: int | None = None
    gender: Gender | None = None
    life_stage: LifeStage | None = None


class PreferencesRequest(BaseModel):
    """Body for updating user preferences."""

    notifications_enabled: bool | None = None
    reminder_time: time | None = None
    language: str | None = None


class DailyReminderRequest(BaseModel):
    """Body for the daily reminder."""

    at: time
    enabled: bool = True


class SupplementReminderRequest(BaseModel):
    """Body for a per-supplement reminder."""

    at: time
    timing: str = "morning"


class QuizResultRequest(BaseModel):
    """Body for recording a quiz completed outside the server-side session."""

    total_questions: int = Field(gt=0)
    correct_count: int = Field(ge=0)
    incorrect_count: int = Field(ge=0)
    coins_earned: int = Field(ge=0)
    difficulty: str | None = None

    @model_validator(mode="after")
    def check_counts(self) -> "QuizResultRequest":
        if self.correct_count + self.incorrect_count > self.total_questions:
            raise ValueError("Answered questions exceed total_questions")
        return self
