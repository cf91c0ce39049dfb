"""Row codec shared by the file and Supabase store adapters."""

from collections.abc import Callable
from datetime import date, datetime, time

from supplement_rewards.domain.models import (
    DailyRecord,
    FavoriteSupplement,
    Gender,
    LifeStage,
    QuizHistoryRecord,
    RewardTransaction,
    TransactionType,
    UserProfile,
    UserRewardsSummary,
)
from supplement_rewards.services.store import Entity

Row = dict[str, object]

TABLES: dict[type, str] = {
    UserProfile: "users",
    DailyRecord: "daily_records",
    QuizHistoryRecord: "quiz_history",
    RewardTransaction: "reward_transactions",
    UserRewardsSummary: "rewards_summary",
    FavoriteSupplement: "favorites",
}

COLUMNS: dict[str, tuple[str, ...]] = {
    "users": (
        "id",
        "user_name",
        "email",
        "age",
        "weight",
        "gender",
        "life_stage",
        "is_email_verified",
        "created_at",
        "updated_at",
        "notifications_enabled",
        "reminder_time",
        "language",
    ),
    "daily_records": (
        "id",
        "supplement_id",
        "supplement_name",
        "date",
        "is_taken",
        "is_favorite",
        "coins_awarded",
        "taken_at",
        "user_id",
    ),
    "quiz_history": (
        "id",
        "attempt_date",
        "total_questions",
        "correct_count",
        "incorrect_count",
        "coins_earned",
        "difficulty",
        "user_id",
    ),
    "reward_transactions": (
        "id",
        "type",
        "coins",
        "title",
        "timestamp",
        "related_id",
        "user_id",
    ),
    "rewards_summary": (
        "id",
        "total_coins_earned",
        "total_coins_spent",
        "current_streak",
        "longest_streak",
        "last_activity_date",
        "supplements_taken",
        "quizzes_completed",
        "has_first_step_achievement",
        "has_week_warrior_achievement",
        "has_quiz_master_achievement",
        "has_supplement_pro_achievement",
        "has_thirty_day_streak_achievement",
        "has_health_guru_achievement",
    ),
    "favorites": ("id", "supplement_id", "added_at", "timing", "user_id"),
}

# Profiles and summaries are keyed by the user id itself.
OWNER_COLUMNS: dict[str, str] = {
    name: "id" if name in {"users", "rewards_summary"} else "user_id"
    for name in TABLES.values()
}


def table_for(kind: type) -> str:
    """Return the table name that stores an entity kind."""
    try:
        return TABLES[kind]
    except KeyError as exc:
        raise TypeError(f"Unsupported entity kind: {kind!r}") from exc


def to_row(entity: Entity) -> Row:
    """Serialize an entity to a JSON-compatible row."""
    if isinstance(entity, UserProfile):
        return {
            "id": entity.id,
            "user_name": entity.user_name,
            "email": entity.email,
            "age": entity.age,
            "weight": entity.weight,
            "gender": entity.gender.value if entity.gender else None,
            "life_stage": entity.life_stage.value if entity.life_stage else None,
            "is_email_verified": entity.is_email_verified,
            "created_at": entity.created_at.isoformat(),
            "updated_at": entity.updated_at.isoformat(),
            "notifications_enabled": entity.notifications_enabled,
            "reminder_time": _format_time(entity.reminder_time),
            "language": entity.language,
        }
    if isinstance(entity, DailyRecord):
        return {
            "id": entity.id,
            "supplement_id": entity.supplement_id,
            "supplement_name": entity.supplement_name,
            "date": entity.day.isoformat(),
            "is_taken": entity.is_taken,
            "is_favorite": entity.is_favorite,
            "coins_awarded": entity.coins_awarded,
            "taken_at": _format_datetime(entity.taken_at),
            "user_id": entity.user_id,
        }
    if isinstance(entity, QuizHistoryRecord):
        return {
            "id": entity.id,
            "attempt_date": entity.attempt_date.isoformat(),
            "total_questions": entity.total_questions,
            "correct_count": entity.correct_count,
            "incorrect_count": entity.incorrect_count,
            "coins_earned": entity.coins_earned,
            "difficulty": entity.difficulty,
            "user_id": entity.user_id,
        }
    if isinstance(entity, RewardTransaction):
        return {
            "id": entity.id,
            "type": entity.type.value,
            "coins": entity.coins,
            "title": entity.title,
            "timestamp": entity.timestamp.isoformat(),
            "related_id": entity.related_id,
            "user_id": entity.user_id,
        }
    if isinstance(entity, UserRewardsSummary):
        return {
            "id": entity.id,
            "total_coins_earned": entity.total_coins_earned,
            "total_coins_spent": entity.total_coins_spent,
            "current_streak": entity.current_streak,
            "longest_streak": entity.longest_streak,
            "last_activity_date": (
                entity.last_activity_date.isoformat()
                if entity.last_activity_date
                else None
            ),
            "supplements_taken": entity.supplements_taken,
            "quizzes_completed": entity.quizzes_completed,
            "has_first_step_achievement": entity.has_first_step_achievement,
            "has_week_warrior_achievement": entity.has_week_warrior_achievement,
            "has_quiz_master_achievement": entity.has_quiz_master_achievement,
            "has_supplement_pro_achievement": entity.has_supplement_pro_achievement,
            "has_thirty_day_streak_achievement": (
                entity.has_thirty_day_streak_achievement
            ),
            "has_health_guru_achievement": entity.has_health_guru_achievement,
        }
    if isinstance(entity, FavoriteSupplement):
        return {
            "id": entity.id,
            "supplement_id": entity.supplement_id,
            "added_at": entity.added_at.isoformat(),
            "timing": entity.timing,
            "user_id": entity.user_id,
        }
    raise TypeError(f"Unsupported entity: {entity!r}")


def from_row(kind: type, row: Row) -> Entity:
    """Deserialize a row into an entity of the given kind."""
    parser = _PARSERS.get(kind)
    if parser is None:
        raise TypeError(f"Unsupported entity kind: {kind!r}")
    return parser(row)


def _parse_user(row: Row) -> UserProfile:
    gender = row.get("gender")
    life_stage = row.get("life_stage")
    age = row.get("age")
    weight = row.get("weight")
    return UserProfile(
        id=str(row["id"]),
        user_name=str(row.get("user_name", "")),
        email=str(row.get("email", "")),
        created_at=_parse_datetime(row.get("created_at")) or datetime.min,
        updated_at=_parse_datetime(row.get("updated_at")) or datetime.min,
        age=int(age) if age is not None else None,
        weight=float(weight) if weight is not None else None,
        gender=Gender(gender) if gender else None,
        life_stage=LifeStage(life_stage) if life_stage else None,
        is_email_verified=bool(row.get("is_email_verified", False)),
        notifications_enabled=bool(row.get("notifications_enabled", True)),
        reminder_time=_parse_time(row.get("reminder_time")),
        language=str(row.get("language") or "English"),
    )


def _parse_daily_record(row: Row) -> DailyRecord:
    user_id = row.get("user_id")
    return DailyRecord(
        id=str(row["id"]),
        supplement_id=str(row.get("supplement_id", "")),
        supplement_name=str(row.get("supplement_name", "")),
        day=date.fromisoformat(str(row["date"])[:10]),
        is_taken=bool(row.get("is_taken", False)),
        is_favorite=bool(row.get("is_favorite", True)),
        coins_awarded=int(row.get("coins_awarded") or 0),
        taken_at=_parse_datetime(row.get("taken_at")),
        user_id=str(user_id) if user_id is not None else None,
    )


def _parse_quiz_history(row: Row) -> QuizHistoryRecord:
    difficulty = row.get("difficulty")
    user_id = row.get("user_id")
    return QuizHistoryRecord(
        id=str(row["id"]),
        attempt_date=_parse_datetime(row.get("attempt_date")) or datetime.min,
        total_questions=int(row.get("total_questions") or 0),
        correct_count=int(row.get("correct_count") or 0),
        incorrect_count=int(row.get("incorrect_count") or 0),
        coins_earned=int(row.get("coins_earned") or 0),
        difficulty=str(difficulty) if difficulty is not None else None,
        user_id=str(user_id) if user_id is not None else None,
    )


def _parse_transaction(row: Row) -> RewardTransaction:
    related_id = row.get("related_id")
    user_id = row.get("user_id")
    return RewardTransaction(
        id=str(row["id"]),
        type=TransactionType(str(row["type"])),
        coins=int(row.get("coins") or 0),
        title=str(row.get("title", "")),
        timestamp=_parse_datetime(row.get("timestamp")) or datetime.min,
        related_id=str(related_id) if related_id is not None else None,
        user_id=str(user_id) if user_id is not None else None,
    )


def _parse_summary(row: Row) -> UserRewardsSummary:
    last_activity = row.get("last_activity_date")
    return UserRewardsSummary(
        id=str(row["id"]),
        total_coins_earned=int(row.get("total_coins_earned") or 0),
        total_coins_spent=int(row.get("total_coins_spent") or 0),
        current_streak=int(row.get("current_streak") or 0),
        longest_streak=int(row.get("longest_streak") or 0),
        last_activity_date=(
            date.fromisoformat(str(last_activity)[:10]) if last_activity else None
        ),
        supplements_taken=int(row.get("supplements_taken") or 0),
        quizzes_completed=int(row.get("quizzes_completed") or 0),
        has_first_step_achievement=bool(row.get("has_first_step_achievement")),
        has_week_warrior_achievement=bool(row.get("has_week_warrior_achievement")),
        has_quiz_master_achievement=bool(row.get("has_quiz_master_achievement")),
        has_supplement_pro_achievement=bool(
            row.get("has_supplement_pro_achievement")
        ),
        has_thirty_day_streak_achievement=bool(
            row.get("has_thirty_day_streak_achievement")
        ),
        has_health_guru_achievement=bool(row.get("has_health_guru_achievement")),
    )


def _parse_favorite(row: Row) -> FavoriteSupplement:
    user_id = row.get("user_id")
    return FavoriteSupplement(
        id=str(row["id"]),
        supplement_id=str(row.get("supplement_id", "")),
        added_at=_parse_datetime(row.get("added_at")) or datetime.min,
        timing=str(row.get("timing") or "morning"),
        user_id=str(user_id) if user_id is not None else None,
    )


_PARSERS: dict[type, Callable[[Row], Entity]] = {
    UserProfile: _parse_user,
    DailyRecord: _parse_daily_record,
    QuizHistoryRecord: _parse_quiz_history,
    RewardTransaction: _parse_transaction,
    UserRewardsSummary: _parse_summary,
    FavoriteSupplement: _parse_favorite,
}


def _format_datetime(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _format_time(value: time | None) -> str | None:
    return value.isoformat() if value else None


def _parse_datetime(value: object) -> datetime | None:
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return None


def _parse_time(value: object) -> time | None:
    if isinstance(value, str) and value:
        return time.fromisoformat(value)
    return None
