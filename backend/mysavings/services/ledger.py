"""Goal ledger: owns goals and their saving-entry histories."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from typing import Any, Literal
from uuid import UUID, uuid4

from .entitlement import Entitlement

logger = logging.getLogger(__name__)

ReminderPolicy = Literal["first-of-month", "fifteenth-of-month", "last-day-of-month"]
REMINDER_LABELS: dict[str, str] = {
    "first-of-month": "1st of every month",
    "fifteenth-of-month": "15th of every month",
    "last-day-of-month": "Last day of every month",
}
DEFAULT_REMINDER: ReminderPolicy = "first-of-month"


class LedgerError(Exception):
    """Base class for recoverable ledger failures. No state is changed when raised."""


class LedgerValidationError(LedgerError, ValueError):
    """A required field is missing or malformed."""


class GoalLimitExceeded(LedgerError):
    """Free tier already holds its one goal."""


class GoalNotFound(LedgerError, LookupError):
    """The referenced goal id is not in the ledger."""


@dataclass(frozen=True)
class SavingEntry:
    amount: int
    date: str = ""
    description: str | None = None


@dataclass(frozen=True)
class Goal:
    """
    Immutable goal snapshot.

    `saved` always equals the sum of `entries` amounts: both are only ever
    replaced together by `GoalLedger.add_saving_entry`.
    """

    id: UUID
    name: str
    target_amount: int
    duration_months: int
    end_date: str = ""
    reminder: ReminderPolicy = DEFAULT_REMINDER
    saved_amount: int = 0
    entries: tuple[SavingEntry, ...] = field(default_factory=tuple)

    @property
    def reminder_label(self) -> str:
        return REMINDER_LABELS[self.reminder]

    @property
    def achieved(self) -> bool:
        return self.saved_amount >= self.target_amount


def _parse_positive_int(value: Any, field_name: str) -> int:
    """Accept ints and digit strings; reject blanks, floats, fractions, and non-positive values."""
    if value is None:
        raise LedgerValidationError(f"{field_name} is required")
    if isinstance(value, bool):
        raise LedgerValidationError(f"{field_name} must be a whole number")

    if isinstance(value, str):
        text = value.strip().replace(",", "")
        if not text:
            raise LedgerValidationError(f"{field_name} is required")
        try:
            parsed = int(text)
        except ValueError as exc:
            raise LedgerValidationError(f"{field_name} must be a whole number") from exc
    elif isinstance(value, int):
        parsed = value
    else:
        raise LedgerValidationError(f"{field_name} must be a whole number")

    if parsed <= 0:
        raise LedgerValidationError(f"{field_name} must be greater than 0")
    return parsed


def normalize_reminder(value: str | None) -> ReminderPolicy:
    """Resolve a policy value or its display label ('15th of every month')."""
    if value is None or not str(value).strip():
        return DEFAULT_REMINDER

    normalized = " ".join(str(value).strip().lower().split())
    for policy, label in REMINDER_LABELS.items():
        if normalized in (policy, label.lower()):
            return policy  # type: ignore[return-value]

    raise LedgerValidationError(
        "reminder must be one of: first-of-month, fifteenth-of-month, last-day-of-month"
    )


def _optional_text(value: str | None) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class GoalLedger:
    """
    In-process store of goals in creation order.

    Every mutation runs under one lock so concurrent callers cannot interleave
    the entitlement check with the insert, or an entry append with the
    saved-amount update.
    """

    def __init__(
        self,
        entitlement: Entitlement,
        id_factory: Callable[[], UUID] = uuid4,
    ) -> None:
        self._entitlement = entitlement
        self._id_factory = id_factory
        self._goals: dict[UUID, Goal] = {}
        self._issued_ids: set[UUID] = set()
        self._lock = threading.RLock()

    def __len__(self) -> int:
        return len(self._goals)

    def _next_id(self) -> UUID:
        goal_id = self._id_factory()
        while goal_id in self._issued_ids:
            goal_id = self._id_factory()
        self._issued_ids.add(goal_id)
        return goal_id

    def create_goal(
        self,
        name: str | None,
        target_amount: Any,
        duration_months: Any,
        end_date: str | None = "",
        reminder: str | None = DEFAULT_REMINDER,
    ) -> Goal:
        """Validate input, check the entitlement, and append a new empty goal."""
        clean_name = str(name or "").strip()
        try:
            if not clean_name:
                raise LedgerValidationError("name is required")
            target = _parse_positive_int(target_amount, "target_amount")
            duration = _parse_positive_int(duration_months, "duration_months")
            policy = normalize_reminder(reminder)
        except LedgerValidationError as exc:
            logger.debug("Rejected goal submission: %s", exc)
            raise

        with self._lock:
            if not self._entitlement.can_create_goal(len(self._goals)):
                logger.info("Goal limit reached on free plan (%d existing)", len(self._goals))
                raise GoalLimitExceeded(
                    "Free plan allows one savings goal. Upgrade to premium for unlimited goals."
                )

            goal = Goal(
                id=self._next_id(),
                name=clean_name,
                target_amount=target,
                duration_months=duration,
                end_date=str(end_date or "").strip(),
                reminder=policy,
            )
            self._goals[goal.id] = goal

        logger.info("Created goal %s (%s, target=%d)", goal.id, goal.name, goal.target_amount)
        return goal

    def add_saving_entry(
        self,
        goal_id: UUID | str,
        amount: Any,
        date: str | None = "",
        description: str | None = None,
    ) -> SavingEntry:
        """Record one contribution and bump the goal's saved amount in the same step."""
        value = _parse_positive_int(amount, "amount")
        entry = SavingEntry(
            amount=value,
            date=str(date or "").strip(),
            description=_optional_text(description),
        )

        with self._lock:
            goal = self._get(goal_id)
            self._goals[goal.id] = replace(
                goal,
                saved_amount=goal.saved_amount + entry.amount,
                entries=goal.entries + (entry,),
            )

        logger.info("Added saving of %d to goal %s", entry.amount, goal.id)
        return entry

    def list_goals(self) -> list[Goal]:
        with self._lock:
            return list(self._goals.values())

    def find_goal(self, goal_id: UUID | str) -> Goal:
        with self._lock:
            return self._get(goal_id)

    def _get(self, goal_id: UUID | str) -> Goal:
        try:
            parsed_id = goal_id if isinstance(goal_id, UUID) else UUID(str(goal_id))
        except (TypeError, ValueError):
            parsed_id = None

        goal = self._goals.get(parsed_id) if parsed_id is not None else None
        if goal is None:
            raise GoalNotFound("Goal not found")
        return goal
