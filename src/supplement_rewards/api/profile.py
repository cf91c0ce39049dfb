"""User profile and reminder endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, status

from supplement_rewards.api.models import (
    DailyReminderRequest,
    PreferencesRequest,
    SupplementReminderRequest,
    UserProfileRequest,
)

if TYPE_CHECKING:
    from supplement_rewards.containers import AppContainer

router = APIRouter(tags=["profile"])


@router.get("/users/me")
async def current_user(request: Request) -> dict[str, object]:
    """Return the current user profile."""
    container: AppContainer = request.app.state.container
    user = container.user_service.get_current_user()
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return {"user": user}


@router.put("/users/{user_id}")
async def upsert_user(
    user_id: str, body: UserProfileRequest, request: Request
) -> dict[str, object]:
    """Create or update a user profile."""
    container: AppContainer = request.app.state.container
    user = container.user_service.create_or_update_user(
        user_id=user_id,
        user_name=body.user_name,
        email=body.email,
        age=body.age,
        gender=body.gender,
        life_stage=body.life_stage,
    )
    return {"user": user}


@router.patch("/users/{user_id}/preferences")
async def update_preferences(
    user_id: str, body: PreferencesRequest, request: Request
) -> dict[str, object]:
    """Update notification and language preferences."""
    container: AppContainer = request.app.state.container
    user = container.user_service.update_preferences(
        user_id,
        notifications_enabled=body.notifications_enabled,
        reminder_time=body.reminder_time,
        language=body.language,
    )
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return {"user": user}


@router.put("/reminders/daily")
async def daily_reminder(
    body: DailyReminderRequest, request: Request
) -> dict[str, object]:
    """Schedule or disable the daily reminder."""
    container: AppContainer = request.app.state.container
    reminder = await container.reminder_service.schedule_daily_reminder(
        body.at, body.enabled
    )
    return {"reminder": reminder}


@router.put("/reminders/supplements/{supplement_id}")
async def supplement_reminder(
    supplement_id: str, body: SupplementReminderRequest, request: Request
) -> dict[str, object]:
    """Schedule a reminder for one supplement."""
    container: AppContainer = request.app.state.container
    reminder = await container.reminder_service.schedule_supplement_reminder(
        supplement_id,
        container.catalog.display_name(supplement_id),
        body.at,
        body.timing,
    )
    return {"reminder": reminder}


@router.get("/reminders")
async def pending_reminders(request: Request) -> dict[str, object]:
    """Return pending reminders."""
    container: AppContainer = request.app.state.container
    return {"reminders": await container.reminder_service.pending()}
