"""Domain models for the supplement rewards engine."""

from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum

from supplement_rewards.domain.dates import date_key

LOCAL_USER_ID = "local"


class Gender(str, Enum):
    """Self-reported gender on a user profile."""

    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class LifeStage(str, Enum):
    """Life stage used for dosage guidance."""

    CHILD = "Child"
    TEENAGER = "Teenager"
    ADULT = "Adult"
    SENIOR = "Senior"

    @property
    def description(self) -> str:
        return _LIFE_STAGE_DESCRIPTIONS[self]


_LIFE_STAGE_DESCRIPTIONS = {
    LifeStage.CHILD: "Under 12 years",
    LifeStage.TEENAGER: "12-18 years",
    LifeStage.ADULT: "18-65 years",
    LifeStage.SENIOR: "Over 65 years",
}


class TransactionType(str, Enum):
    """Kinds of entries in the reward ledger."""

    SUPPLEMENT_TAKEN = "supplement_taken"
    QUIZ_COMPLETED = "quiz_completed"
    STREAK_BONUS = "streak_bonus"
    ACHIEVEMENT = "achievement"
    COINS_SPENT = "coins_spent"


@dataclass(frozen=True)
class UserProfile:
    """Represents the locally stored user profile."""

    id: str
    user_name: str
    email: str
    created_at: datetime
    updated_at: datetime
    age: int | None = None
    weight: float | None = None
    gender: Gender | None = None
    life_stage: LifeStage | None = None
    is_email_verified: bool = False
    notifications_enabled: bool = True
    reminder_time: time | None = None
    language: str = "English"


@dataclass(frozen=True)
class DailyRecord:
    """Intake state of one supplement on one calendar day."""

    id: str
    supplement_id: str
    supplement_name: str
    day: date
    is_taken: bool = False
    is_favorite: bool = True
    coins_awarded: int = 0
    taken_at: datetime | None = None
    user_id: str | None = None

    @staticmethod
    def make_id(supplement_id: str, day: date | datetime) -> str:
        """Return the composite id ``{supplement_id}_{yyyy-MM-dd}``."""
        return f"{supplement_id}_{date_key(day)}"


@dataclass(frozen=True)
class QuizHistoryRecord:
    """A single completed quiz attempt."""

    id: str
    attempt_date: datetime
    total_questions: int
    correct_count: int
    incorrect_count: int
    coins_earned: int
    difficulty: str | None = None
    user_id: str | None = None

    @property
    def percentage(self) -> float:
        if self.total_questions <= 0:
            return 0.0
        return self.correct_count / self.total_questions * 100


@dataclass(frozen=True)
class RewardTransaction:
    """Append-only ledger entry. Positive coins are earnings."""

    id: str
    type: TransactionType
    coins: int
    title: str
    timestamp: datetime
    related_id: str | None = None
    user_id: str | None = None


@dataclass(frozen=True)
class UserRewardsSummary:
    """Running totals, streak state and achievement flags for one user."""

    id: str
    total_coins_earned: int = 0
    total_coins_spent: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    last_activity_date: date | None = None
    supplements_taken: int = 0
    quizzes_completed: int = 0
    has_first_step_achievement: bool = False
    has_week_warrior_achievement: bool = False
    has_quiz_master_achievement: bool = False
    has_supplement_pro_achievement: bool = False
    has_thirty_day_streak_achievement: bool = False
    has_health_guru_achievement: bool = False

    @property
    def user_id(self) -> str:
        return self.id

    @property
    def available_coins(self) -> int:
        return self.total_coins_earned - self.total_coins_spent


@dataclass(frozen=True)
class FavoriteSupplement:
    """Presence of this record marks a supplement as a favorite."""

    id: str
    supplement_id: str
    added_at: datetime
    timing: str = "morning"
    user_id: str | None = None

    @staticmethod
    def make_id(user_id: str | None, supplement_id: str) -> str:
        """Return the composite id ``{user_id}_{supplement_id}``."""
        return f"{user_id or LOCAL_USER_ID}_{supplement_id}"
