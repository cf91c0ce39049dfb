"""Supplement intake, favorites and rewards endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from supplement_rewards.api.models import (
    SpendCoinsRequest,
    TakeSupplementRequest,
    ToggleFavoriteRequest,
)

if TYPE_CHECKING:
    from supplement_rewards.containers import AppContainer
    from supplement_rewards.domain.models import UserRewardsSummary

router = APIRouter(tags=["rewards"])


def summary_payload(summary: UserRewardsSummary) -> dict[str, object]:
    """Serialize a summary including derived balances."""
    payload = asdict(summary)
    payload["available_coins"] = summary.available_coins
    return payload


@router.get("/supplements")
async def list_supplements(request: Request, q: str | None = None) -> dict[str, object]:
    """Search the supplement catalog."""
    container: AppContainer = request.app.state.container
    return {"supplements": container.catalog.search(q)}


@router.get("/supplements/today")
async def today_records(request: Request) -> dict[str, object]:
    """Return today's intake records and counts."""
    container: AppContainer = request.app.state.container
    service = container.daily_record_service
    taken, total = service.today_stats()
    return {
        "records": service.records_for_day(service.clock()),
        "taken": taken,
        "total": total,
    }


@router.post("/supplements/{supplement_id}/take")
async def take_supplement(
    supplement_id: str, body: TakeSupplementRequest, request: Request
) -> dict[str, object]:
    """Mark a supplement taken and return the coins awarded."""
    container: AppContainer = request.app.state.container
    name = body.supplement_name or container.catalog.display_name(supplement_id)
    result = container.rewards_ledger.mark_supplement_taken(
        supplement_id, name, body.day
    )
    return {
        "coins_awarded": result.coins_awarded,
        "summary": summary_payload(result.summary),
    }


@router.post("/favorites/{supplement_id}/toggle")
async def toggle_favorite(
    supplement_id: str, body: ToggleFavoriteRequest, request: Request
) -> dict[str, object]:
    """Toggle a favorite supplement."""
    container: AppContainer = request.app.state.container
    is_favorite = container.favorites_service.toggle(supplement_id, body.timing)
    return {"supplement_id": supplement_id, "is_favorite": is_favorite}


@router.get("/favorites")
async def list_favorites(request: Request) -> dict[str, object]:
    """Return favorite supplements."""
    container: AppContainer = request.app.state.container
    return {"favorites": container.favorites_service.list_favorites()}


@router.get("/rewards/summary")
async def rewards_summary(request: Request) -> dict[str, object]:
    """Return the rewards summary with today's earnings."""
    container: AppContainer = request.app.state.container
    ledger = container.rewards_ledger
    return {
        "summary": summary_payload(ledger.get_or_create_summary()),
        "earned_today": ledger.earned_today(),
    }


@router.get("/rewards/achievements")
async def achievements(request: Request) -> dict[str, object]:
    """Return achievement badges and the unlocked count."""
    container: AppContainer = request.app.state.container
    badges = container.rewards_ledger.achievements()
    return {
        "achievements": badges,
        "unlocked": sum(1 for badge in badges if badge.is_unlocked),
        "total": len(badges),
    }


@router.get("/rewards/transactions")
async def transactions(request: Request, limit: int = 20) -> dict[str, object]:
    """Return recent reward transactions."""
    container: AppContainer = request.app.state.container
    return {"transactions": container.rewards_ledger.transactions(limit)}


@router.post("/rewards/spend")
async def spend_coins(body: SpendCoinsRequest, request: Request) -> dict[str, object]:
    """Debit coins from the available balance."""
    container: AppContainer = request.app.state.container
    summary = container.rewards_ledger.spend_coins(
        body.amount, body.title, body.related_id
    )
    return {"summary": summary_payload(summary)}
