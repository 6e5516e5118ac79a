"""
Analytics API router.

Fetch and display:

- total saved across goals
- overall progress (mean of per-goal progress)
- per-goal progress rows
- insights text
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from .services.metrics import build_portfolio_summary
from .store import AppStore, get_store

router = APIRouter(prefix="/analytics", tags=["analytics"])


class GoalProgressRow(BaseModel):
    """One bar in the goals-progress card."""
    id: UUID
    name: str
    progress_pct: int
    saved_display: str
    target_display: str
    achieved: bool


class AnalyticsResponse(BaseModel):
    """Full analytics screen payload."""
    goal_count: int
    total_saved: int
    total_saved_display: str
    total_target: int
    overall_progress_pct: int
    achieved_count: int
    goals_progress: list[GoalProgressRow]
    goals_progress_message: str | None
    insights: str


@router.get("", response_model=AnalyticsResponse)
async def analytics_summary(store: AppStore = Depends(get_store)) -> AnalyticsResponse:
    """
    Recomputed on every call from the current ledger snapshot.

    Example response:
    {
      "goal_count": 1,
      "total_saved": 15000,
      "total_saved_display": "₹15,000",
      "total_target": 50000,
      "overall_progress_pct": 30,
      "achieved_count": 0,
      "goals_progress": [
        {"id": "...", "name": "Buy A Car", "progress_pct": 30,
         "saved_display": "₹15,000", "target_display": "₹50,000", "achieved": false}
      ],
      "goals_progress_message": null,
      "insights": "You have 1 active goal"
    }
    """
    payload = build_portfolio_summary(store.ledger.list_goals())
    return AnalyticsResponse.model_validate(payload)
