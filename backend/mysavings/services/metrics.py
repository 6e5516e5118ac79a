"""
Derived goal and portfolio metrics.

Pure functions over ledger snapshots; nothing here is stored or mutated, so
every read can recompute.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from .ledger import Goal
from .money import ceil_div, div_round_half_up, format_currency, progress_pct

EMPTY_INSIGHT = "You have no active goals yet. Create your first goal to start saving."
EMPTY_PROGRESS_MESSAGE = "No Active Goals to Analyze"


def total_saved(goals: Sequence[Goal]) -> int:
    return sum(goal.saved_amount for goal in goals)


def overall_progress(goals: Sequence[Goal]) -> int:
    """Rounded mean of per-goal progress percentages; 0 for an empty ledger."""
    if not goals:
        return 0
    pcts = sum(progress_pct(goal.saved_amount, goal.target_amount) for goal in goals)
    return div_round_half_up(pcts, len(goals))


def insights_text(goal_count: int) -> str:
    if goal_count <= 0:
        return EMPTY_INSIGHT
    if goal_count == 1:
        return "You have 1 active goal"
    return f"You have {goal_count} active goals"


def compute_goal_metrics(goal: Goal) -> dict[str, Any]:
    """Build the collaborator-facing read model for one goal."""
    pct = progress_pct(goal.saved_amount, goal.target_amount)
    remaining_amount = max(goal.target_amount - goal.saved_amount, 0)

    if remaining_amount == 0:
        monthly_save_amount = 0
    else:
        monthly_save_amount = ceil_div(remaining_amount, goal.duration_months)

    return {
        "id": goal.id,
        "name": goal.name,
        "target_amount": goal.target_amount,
        "saved_amount": goal.saved_amount,
        "duration_months": goal.duration_months,
        "end_date": goal.end_date,
        "reminder": goal.reminder,
        "reminder_label": goal.reminder_label,
        "entries": [
            {"amount": entry.amount, "date": entry.date, "description": entry.description}
            for entry in goal.entries
        ],
        "progress_pct": pct,
        "progress_bar_pct": min(pct, 100),
        "achieved": goal.achieved,
        "remaining_amount": remaining_amount,
        "monthly_save_amount": monthly_save_amount,
    }


def build_portfolio_summary(goals: Sequence[Goal]) -> dict[str, Any]:
    """Aggregate analytics payload: totals, per-goal progress rows, and insight text."""
    saved = total_saved(goals)
    rows = [
        {
            "id": goal.id,
            "name": goal.name,
            "progress_pct": progress_pct(goal.saved_amount, goal.target_amount),
            "saved_display": format_currency(goal.saved_amount),
            "target_display": format_currency(goal.target_amount),
            "achieved": goal.achieved,
        }
        for goal in goals
    ]

    return {
        "goal_count": len(goals),
        "total_saved": saved,
        "total_saved_display": format_currency(saved),
        "total_target": sum(goal.target_amount for goal in goals),
        "overall_progress_pct": overall_progress(goals),
        "achieved_count": sum(1 for goal in goals if goal.achieved),
        "goals_progress": rows,
        "goals_progress_message": None if rows else EMPTY_PROGRESS_MESSAGE,
        "insights": insights_text(len(goals)),
    }
