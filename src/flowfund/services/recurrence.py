"""Recurrence resolution: next due dates and cadence stepping."""

from __future__ import annotations

import math
from calendar import monthrange
from datetime import date, timedelta
from typing import Iterator, Optional

from ..models.cadence import Cadence, CadenceStep, CustomCadence, FixedCadence
from ..models.enums import CustomUnit, Recurrence

_FIXED_LABELS = {
    Recurrence.DAILY: "Daily",
    Recurrence.WEEKLY: "Weekly",
    Recurrence.BIWEEKLY: "Bi-weekly",
    Recurrence.MONTHLY: "Monthly",
    Recurrence.QUARTERLY: "Quarterly",
    Recurrence.YEARLY: "Yearly",
}


def add_months(value: date, months: int) -> date:
    """Shift *value* by whole calendar months.

    Days past the end of the target month clamp to its last day, so
    2024-01-31 + 1 month is 2024-02-29.
    """

    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    last_day = monthrange(year, month)[1]
    return date(year, month, min(value.day, last_day))


def advance(value: date, step: CadenceStep, times: int = 1) -> date:
    """Move *value* forward by ``times`` cadence steps."""

    if step.months:
        value = add_months(value, step.months * times)
    if step.days:
        value = value + timedelta(days=step.days * times)
    return value


def occurrence_at(base: date, cadence: Cadence, index: int) -> date:
    """Return the ``index``-th occurrence counted from the anchor *base*.

    Computing from the anchor (rather than from the previous occurrence)
    keeps month-end dates from drifting: Jan 31, Feb 29, Mar 31.
    """

    return advance(base, cadence.step, index)


def iter_occurrences(base: date, cadence: Cadence, start_index: int = 0) -> Iterator[date]:
    """Yield successive occurrences of *cadence* anchored at *base*."""

    index = start_index
    while True:
        yield occurrence_at(base, cadence, index)
        index += 1


def first_index_on_or_after(base: date, cadence: Cadence, target: date) -> int:
    """Index of the first occurrence that is on or after *target*."""

    if target <= base:
        return 0
    step = cadence.step
    if not step.months:
        return math.ceil((target - base).days / step.days)

    months_between = (target.year - base.year) * 12 + (target.month - base.month)
    index = max(0, months_between // step.months - 1)
    while occurrence_at(base, cadence, index) < target:
        index += 1
    return index


def first_on_or_after(base: date, cadence: Cadence, target: date) -> date:
    """First occurrence of *cadence* anchored at *base* that is >= *target*."""

    return occurrence_at(base, cadence, first_index_on_or_after(base, cadence, target))


def get_next_occurrence(
    base_date: date, cadence: Optional[Cadence], *, today: date | None = None
) -> date:
    """Return the earliest date on the cadence that is on or after today.

    One-time obligations (``cadence is None``) are never rolled forward, so a
    past due date comes back unchanged.
    """

    today = today or date.today()
    if base_date >= today or cadence is None:
        return base_date
    return first_on_or_after(base_date, cadence, today)


def step_forward(
    value: date, cadence: Optional[Cadence], *, anchor: date | None = None
) -> date:
    """Advance exactly one cadence period from *value*.

    With an *anchor* the result is the next occurrence of the schedule
    anchored there, so stepping from a clamped month end returns to the
    anchor's day (2024-02-29 steps to 2024-03-31 for a Jan 31 anchor).
    Without one, *value* itself is shifted by one period.

    There is no period for a one-time obligation, so *value* is returned as-is.
    """

    if cadence is None:
        return value
    if anchor is None:
        return advance(value, cadence.step)
    index = first_index_on_or_after(anchor, cadence, value + timedelta(days=1))
    return occurrence_at(anchor, cadence, index)


def describe_cadence(cadence: Optional[Cadence]) -> str:
    """Human readable label such as "Monthly" or "Every 3 weeks"."""

    if cadence is None:
        return "One-time"
    if isinstance(cadence, FixedCadence):
        return _FIXED_LABELS[cadence.recurrence]
    unit = CustomUnit(cadence.unit).value
    if cadence.interval == 1:
        return f"Every {unit}"
    return f"Every {cadence.interval} {unit}s"


def allows_multiple_per_period(cadence: Optional[Cadence]) -> bool:
    """Whether a cadence may hit more than once inside one pay period.

    Only weekly, bi-weekly and custom cadences of one or two weeks qualify;
    everything else contributes at most one occurrence per window.
    """

    if isinstance(cadence, FixedCadence):
        return cadence.recurrence in (Recurrence.WEEKLY, Recurrence.BIWEEKLY)
    if isinstance(cadence, CustomCadence):
        return cadence.unit is CustomUnit.WEEK and cadence.interval <= 2
    return False


def days_until(target: date, *, today: date | None = None) -> int:
    """Whole days from today to *target*; negative when it has passed."""

    today = today or date.today()
    return (target - today).days


__all__ = [
    "add_months",
    "advance",
    "allows_multiple_per_period",
    "days_until",
    "describe_cadence",
    "first_index_on_or_after",
    "first_on_or_after",
    "get_next_occurrence",
    "iter_occurrences",
    "occurrence_at",
    "step_forward",
]
