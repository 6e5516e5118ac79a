"""Goals router: create/list goals and record savings, with computed progress fields."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field, StrictInt

from .services.ledger import Goal, GoalLimitExceeded, ReminderPolicy
from .services.metrics import compute_goal_metrics
from .store import AppStore, get_store

router = APIRouter(prefix="/goals", tags=["goals"])


class GoalCreateRequest(BaseModel):
    # Amounts arrive as typed form values; the ledger does the parsing.
    # StrictInt keeps JSON booleans from being coerced to 1.
    name: str = Field(default="", max_length=120)
    target_amount: StrictInt | str | None = None
    duration_months: StrictInt | str | None = None
    end_date: str = Field(default="", max_length=40)
    reminder: str | None = None


class SavingCreateRequest(BaseModel):
    amount: StrictInt | str | None = None
    date: str = Field(default="", max_length=40)
    description: str | None = Field(default=None, max_length=200)


class SavingEntryResponse(BaseModel):
    amount: int
    date: str
    description: str | None


class GoalResponse(BaseModel):
    id: UUID
    name: str
    target_amount: int
    saved_amount: int
    duration_months: int
    end_date: str
    reminder: ReminderPolicy
    reminder_label: str
    entries: list[SavingEntryResponse]
    progress_pct: int
    progress_bar_pct: int
    achieved: bool
    remaining_amount: int
    monthly_save_amount: int


class SavingCreatedResponse(BaseModel):
    entry: SavingEntryResponse
    goal: GoalResponse


def _goal_response(goal: Goal) -> GoalResponse:
    return GoalResponse(**compute_goal_metrics(goal))


@router.post("", response_model=GoalResponse, status_code=status.HTTP_201_CREATED)
async def create_goal_endpoint(
    payload: GoalCreateRequest,
    store: AppStore = Depends(get_store),
) -> GoalResponse:
    """
    Create one savings goal.

    Free plan: only the first goal succeeds; later attempts return 403.
    """
    try:
        goal = store.ledger.create_goal(
            payload.name,
            payload.target_amount,
            payload.duration_months,
            end_date=payload.end_date,
            reminder=payload.reminder,
        )
        return _goal_response(goal)
    except GoalLimitExceeded as exc:
        raise HTTPException(status_code=403, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@router.get("", response_model=list[GoalResponse])
async def list_goals_endpoint(store: AppStore = Depends(get_store)) -> list[GoalResponse]:
    """List goals in the order they were created."""
    return [_goal_response(goal) for goal in store.ledger.list_goals()]


@router.get("/{goal_id}", response_model=GoalResponse)
async def get_goal_endpoint(
    goal_id: UUID,
    store: AppStore = Depends(get_store),
) -> GoalResponse:
    try:
        return _goal_response(store.ledger.find_goal(goal_id))
    except LookupError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.post(
    "/{goal_id}/savings",
    response_model=SavingCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_saving_endpoint(
    goal_id: UUID,
    payload: SavingCreateRequest,
    store: AppStore = Depends(get_store),
) -> SavingCreatedResponse:
    """Record one saving against a goal and return the updated goal."""
    try:
        entry = store.ledger.add_saving_entry(
            goal_id,
            payload.amount,
            date=payload.date,
            description=payload.description,
        )
        goal = store.ledger.find_goal(goal_id)
    except LookupError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    return SavingCreatedResponse(
        entry=SavingEntryResponse(amount=entry.amount, date=entry.date, description=entry.description),
        goal=_goal_response(goal),
    )


@router.get("/{goal_id}/savings", response_model=list[SavingEntryResponse])
async def list_savings_endpoint(
    goal_id: UUID,
    store: AppStore = Depends(get_store),
) -> list[SavingEntryResponse]:
    """Saving history in the order entries were recorded."""
    try:
        goal = store.ledger.find_goal(goal_id)
    except LookupError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc

    return [
        SavingEntryResponse(amount=entry.amount, date=entry.date, description=entry.description)
        for entry in goal.entries
    ]
