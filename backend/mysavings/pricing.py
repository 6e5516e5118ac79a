"""Pricing router: current plan and the one-way premium upgrade."""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from .store import AppStore, get_store

router = APIRouter(prefix="/pricing", tags=["pricing"])

PREMIUM_FEATURES = [
    "Unlimited savings goals",
    "Push notifications & reminders",
    "Set custom reminder dates",
    "Premium analytics & insights",
    "Priority support",
    "AI Gemini advanced tips",
]


class PlanResponse(BaseModel):
    plan: Literal["FREE", "PREMIUM"]
    is_premium: bool
    can_create_goal: bool
    goal_count: int
    premium_features: list[str]


def _plan_response(store: AppStore) -> PlanResponse:
    goal_count = len(store.ledger)
    return PlanResponse(
        plan=store.entitlement.plan,
        is_premium=store.entitlement.is_premium(),
        can_create_goal=store.entitlement.can_create_goal(goal_count),
        goal_count=goal_count,
        premium_features=PREMIUM_FEATURES,
    )


@router.get("", response_model=PlanResponse)
async def get_plan(store: AppStore = Depends(get_store)) -> PlanResponse:
    return _plan_response(store)


@router.post("/upgrade", response_model=PlanResponse)
async def upgrade_plan(store: AppStore = Depends(get_store)) -> PlanResponse:
    """Switch to premium. Repeating the call is harmless."""
    store.entitlement.upgrade()
    return _plan_response(store)
