from __future__ import annotations

from uuid import UUID, uuid4

import pytest

from mysavings.services.entitlement import Entitlement
from mysavings.services.ledger import (
    GoalLedger,
    GoalLimitExceeded,
    GoalNotFound,
    LedgerValidationError,
    normalize_reminder,
)


def _ledger(premium: bool = False) -> GoalLedger:
    return GoalLedger(Entitlement(premium=premium))


def test_create_goal_success() -> None:
    ledger = _ledger()

    goal = ledger.create_goal("Buy A Car", "50000", "24", end_date="30 Jun 2025")

    assert isinstance(goal.id, UUID)
    assert goal.name == "Buy A Car"
    assert goal.target_amount == 50000
    assert goal.duration_months == 24
    assert goal.end_date == "30 Jun 2025"
    assert goal.reminder == "first-of-month"
    assert goal.reminder_label == "1st of every month"
    assert goal.saved_amount == 0
    assert goal.entries == ()
    assert ledger.list_goals() == [goal]


@pytest.mark.parametrize(
    ("name", "target", "duration"),
    [
        ("", "50000", "24"),
        ("   ", "50000", "24"),
        ("Car", "", "24"),
        ("Car", "abc", "24"),
        ("Car", None, "24"),
        ("Car", "0", "24"),
        ("Car", -5, "24"),
        ("Car", "12.5", "24"),
        ("Car", "50000", ""),
        ("Car", "50000", "soon"),
        ("Car", True, "24"),
        ("Car", "50000", False),
        ("Car", 100.0, "24"),
        ("Car", "100.0", "24"),
    ],
)
def test_create_goal_rejects_incomplete_submissions(name, target, duration) -> None:
    ledger = _ledger()

    with pytest.raises(LedgerValidationError):
        ledger.create_goal(name, target, duration)

    assert ledger.list_goals() == []


def test_validation_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        _ledger().create_goal("Car", "", "12")


def test_free_plan_second_goal_rejected() -> None:
    ledger = _ledger()
    first = ledger.create_goal("Laptop", 60000, 12)

    with pytest.raises(GoalLimitExceeded):
        ledger.create_goal("Phone", 20000, 6)

    assert ledger.list_goals() == [first]


def test_upgrade_allows_many_goals_in_insertion_order() -> None:
    entitlement = Entitlement()
    ledger = GoalLedger(entitlement)
    ledger.create_goal("Goal 0", 1000, 1)
    entitlement.upgrade()

    for index in range(1, 6):
        ledger.create_goal(f"Goal {index}", 1000 * index, index)

    goals = ledger.list_goals()
    assert [goal.name for goal in goals] == [f"Goal {index}" for index in range(6)]
    assert len({goal.id for goal in goals}) == 6
    assert entitlement.is_premium() is True


def test_ids_are_never_reused() -> None:
    repeated = uuid4()
    fresh = uuid4()
    ids = iter([repeated, repeated, fresh])
    ledger = GoalLedger(Entitlement(premium=True), id_factory=lambda: next(ids))

    first = ledger.create_goal("A", 100, 1)
    second = ledger.create_goal("B", 100, 1)

    assert first.id == repeated
    assert second.id == fresh


def test_saved_tracks_sum_of_entries() -> None:
    ledger = _ledger()
    goal = ledger.create_goal("Buy A Car", 50000, 24)

    for amount in (5000, 5000, 5000, 250, 1):
        ledger.add_saving_entry(goal.id, amount, "30 Jan 2025", "Salary savings")
        current = ledger.find_goal(goal.id)
        assert current.saved_amount == sum(entry.amount for entry in current.entries)

    current = ledger.find_goal(goal.id)
    assert current.saved_amount == 15251
    assert [entry.amount for entry in current.entries] == [5000, 5000, 5000, 250, 1]


def test_add_saving_keeps_recording_order_and_fields() -> None:
    ledger = _ledger()
    goal = ledger.create_goal("Trip", 10000, 5)

    ledger.add_saving_entry(goal.id, "2000", "15 Mar 2025", "  Bonus money ")
    ledger.add_saving_entry(str(goal.id), 1000, "01 Jan 2025", "")

    entries = ledger.find_goal(goal.id).entries
    assert entries[0].date == "15 Mar 2025"
    assert entries[0].description == "Bonus money"
    assert entries[1].date == "01 Jan 2025"
    assert entries[1].description is None


def test_over_saving_is_allowed() -> None:
    ledger = _ledger()
    goal = ledger.create_goal("Phone", 1000, 2)

    ledger.add_saving_entry(goal.id, 1500)

    current = ledger.find_goal(goal.id)
    assert current.saved_amount == 1500
    assert current.achieved is True


def test_invalid_saving_leaves_goal_untouched() -> None:
    ledger = _ledger()
    goal = ledger.create_goal("Phone", 1000, 2)
    ledger.add_saving_entry(goal.id, 100)

    for bad_amount in (0, -10, "", "ten", None, True, 5.0, "5.0"):
        with pytest.raises(LedgerValidationError):
            ledger.add_saving_entry(goal.id, bad_amount)

    current = ledger.find_goal(goal.id)
    assert current.saved_amount == 100
    assert len(current.entries) == 1


def test_unknown_goal_raises_not_found() -> None:
    ledger = _ledger()

    with pytest.raises(GoalNotFound):
        ledger.add_saving_entry(uuid4(), 100)
    with pytest.raises(GoalNotFound):
        ledger.find_goal("not-a-uuid")
    with pytest.raises(LookupError):
        ledger.find_goal(uuid4())


def test_earlier_snapshots_are_not_mutated() -> None:
    ledger = _ledger()
    goal = ledger.create_goal("Bike", 5000, 5)

    ledger.add_saving_entry(goal.id, 500)

    assert goal.saved_amount == 0
    assert goal.entries == ()


def test_reminder_accepts_values_and_labels() -> None:
    assert normalize_reminder(None) == "first-of-month"
    assert normalize_reminder("fifteenth-of-month") == "fifteenth-of-month"
    assert normalize_reminder("15th of every month") == "fifteenth-of-month"
    assert normalize_reminder("Last day of every month") == "last-day-of-month"
    with pytest.raises(LedgerValidationError):
        normalize_reminder("every tuesday")
