"""Expand outgoings into dated occurrences inside a pay-period window.

This is the source of every "amount required" figure: the allocation engine
only ever sees the per-account sums produced here.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from ..logging_config import get_logger
from ..models.base import to_cents
from ..models.outgoing import Outgoing
from .plans import build_schedule
from .recurrence import (
    allows_multiple_per_period,
    describe_cadence,
    first_index_on_or_after,
    get_next_occurrence,
    occurrence_at,
    step_forward,
)

logger = get_logger("services.occurrences")


@dataclass(slots=True)
class Occurrence:
    """One concrete dated instance of an outgoing's payment."""

    outgoing_id: str
    account_id: str
    name: str
    date: date
    amount: float
    label: str
    installment_index: Optional[int] = None
    installment_count: Optional[int] = None

    @property
    def is_installment(self) -> bool:
        return self.installment_index is not None


def _plan_occurrences(outgoing: Outgoing, window_start: date, window_end: date) -> list[Occurrence]:
    schedule = build_schedule(outgoing)
    if not schedule:
        logger.debug(
            "Payment plan yields no installments",
            extra={"outgoing_id": outgoing.id, "due_date": outgoing.due_date.isoformat()},
        )
        return []
    return [
        Occurrence(
            outgoing_id=outgoing.id,
            account_id=outgoing.account_id,
            name=outgoing.name,
            date=installment.due_date,
            amount=installment.amount,
            label=installment.label,
            installment_index=installment.index,
            installment_count=installment.count,
        )
        for installment in schedule
        if window_start <= installment.due_date <= window_end
    ]


def expand(
    outgoing: Outgoing,
    window_start: date,
    window_end: date,
    *,
    today: date | None = None,
) -> list[Occurrence]:
    """Return the occurrences of *outgoing* for the window [start, end].

    Rules, in order:

    * paused outgoings produce nothing;
    * an enabled payment plan replaces normal recurrence with its
      installments that fall inside the window;
    * a one-time outgoing is reported when its due date is on or after the
      window start, even if it lies beyond the window end;
    * a recurring outgoing always reports its first occurrence on or after
      the window start (even past the window end, so an upcoming payment is
      never hidden); weekly, bi-weekly and one/two-week custom cadences then
      add every further occurrence up to the window end.
    """

    if outgoing.is_paused:
        logger.debug("Skipping paused outgoing", extra={"outgoing_id": outgoing.id})
        return []

    if outgoing.has_active_plan:
        return _plan_occurrences(outgoing, window_start, window_end)

    cadence = outgoing.cadence
    label = describe_cadence(cadence)

    def _occurrence(when: date) -> Occurrence:
        return Occurrence(
            outgoing_id=outgoing.id,
            account_id=outgoing.account_id,
            name=outgoing.name,
            date=when,
            amount=outgoing.amount,
            label=label,
        )

    next_due = get_next_occurrence(outgoing.due_date, cadence, today=today)
    if cadence is None:
        return [_occurrence(next_due)] if next_due >= window_start else []

    index = first_index_on_or_after(outgoing.due_date, cadence, max(next_due, window_start))
    current = occurrence_at(outgoing.due_date, cadence, index)
    occurrences = [_occurrence(current)]
    if current > window_end or not allows_multiple_per_period(cadence):
        return occurrences

    while True:
        current = step_forward(current, cadence, anchor=outgoing.due_date)
        if current > window_end:
            break
        occurrences.append(_occurrence(current))
    return occurrences


def expand_all(
    outgoings: Iterable[Outgoing],
    window_start: date,
    window_end: date,
    *,
    today: date | None = None,
) -> list[Occurrence]:
    """Occurrences of every outgoing, ordered by date then name."""

    occurrences: list[Occurrence] = []
    for outgoing in outgoings:
        occurrences.extend(expand(outgoing, window_start, window_end, today=today))
    return sorted(occurrences, key=lambda o: (o.date, o.name))


def required_per_account(
    outgoings: Iterable[Outgoing],
    window_start: date,
    window_end: date,
    *,
    today: date | None = None,
) -> dict[str, float]:
    """Sum of occurrence amounts keyed by account id.

    Accounts without occurrences in the window are absent.
    """

    required: dict[str, float] = {}
    for outgoing in outgoings:
        for occurrence in expand(outgoing, window_start, window_end, today=today):
            required[occurrence.account_id] = (
                required.get(occurrence.account_id, 0.0) + occurrence.amount
            )
    return {account_id: to_cents(amount) for account_id, amount in required.items()}


def total_required(
    outgoings: Iterable[Outgoing],
    window_start: date,
    window_end: date,
    *,
    today: date | None = None,
) -> float:
    """Total amount needed to cover every occurrence in the window."""

    per_account = required_per_account(outgoings, window_start, window_end, today=today)
    return to_cents(sum(per_account.values()))


def group_by_date(occurrences: Iterable[Occurrence]) -> "OrderedDict[date, list[Occurrence]]":
    """Group occurrences by date, earliest first."""

    grouped: OrderedDict[date, list[Occurrence]] = OrderedDict()
    for occurrence in sorted(occurrences, key=lambda o: (o.date, o.name)):
        grouped.setdefault(occurrence.date, []).append(occurrence)
    return grouped


__all__ = [
    "Occurrence",
    "expand",
    "expand_all",
    "group_by_date",
    "required_per_account",
    "total_required",
]
