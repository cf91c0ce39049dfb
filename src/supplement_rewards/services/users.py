"""User profile business logic."""

import re
from dataclasses import dataclass, field, replace
from datetime import time

from supplement_rewards.domain.dates import Clock, make_clock
from supplement_rewards.domain.errors import ValidationError
from supplement_rewards.domain.models import Gender, LifeStage, UserProfile
from supplement_rewards.services.store import EntityStore

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass
class UserService:
    """Application service for the local user profile."""

    store: EntityStore
    clock: Clock = field(default_factory=make_clock)

    def get_current_user(self) -> UserProfile | None:
        """Return the most recently created profile, if any."""
        users = self.store.query(
            UserProfile,
            order_by=lambda user: user.created_at,
            descending=True,
            limit=1,
        )
        return users[0] if users else None

    def get_user(self, user_id: str) -> UserProfile | None:
        """Return a profile by id, if present."""
        return self.store.get(UserProfile, user_id)

    def create_or_update_user(  # noqa: PLR0913
        self,
        user_id: str,
        user_name: str,
        email: str,
        age: int | None = None,
        gender: Gender | None = None,
        life_stage: LifeStage | None = None,
    ) -> UserProfile:
        """Create the profile or update its editable fields."""
        user_name = user_name.strip()
        email = email.strip()
        if not user_name:
            raise ValidationError("User name must not be empty")
        validate_email(email)
        if age is not None and age < 0:
            raise ValidationError("Age must not be negative")

        now = self.clock()
        existing = self.store.get(UserProfile, user_id)
        if existing is None:
            user = UserProfile(
                id=user_id,
                user_name=user_name,
                email=email,
                age=age,
                gender=gender,
                life_stage=life_stage,
                created_at=now,
                updated_at=now,
            )
        else:
            user = replace(
                existing,
                user_name=user_name,
                email=email,
                age=age,
                gender=gender,
                life_stage=life_stage,
                updated_at=now,
            )
        self.store.upsert(user)
        return user

    def update_preferences(
        self,
        user_id: str,
        notifications_enabled: bool | None = None,
        reminder_time: time | None = None,
        language: str | None = None,
    ) -> UserProfile | None:
        """Update notification and language preferences."""
        existing = self.store.get(UserProfile, user_id)
        if existing is None:
            return None
        user = replace(
            existing,
            notifications_enabled=(
                existing.notifications_enabled
                if notifications_enabled is None
                else notifications_enabled
            ),
            reminder_time=reminder_time or existing.reminder_time,
            language=language or existing.language,
            updated_at=self.clock(),
        )
        self.store.upsert(user)
        return user


def validate_email(email: str) -> None:
    """Raise ``ValidationError`` unless the email looks deliverable."""
    if not email:
        raise ValidationError("Email must not be empty")
    if not _EMAIL_PATTERN.match(email):
        raise ValidationError("Please enter a valid email address")
