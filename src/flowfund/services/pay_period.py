"""Pay period bounds derived from the user's pay cycle."""

from __future__ import annotations

from calendar import monthrange
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum

from ..errors import PayCycleError
from ..logging_config import get_logger
from ..models.cadence import pay_cadence
from ..models.enums import PayFrequency
from ..models.pay_cycle import PayCycle
from .recurrence import add_months, advance

logger = get_logger("services.pay_period")


class PayPeriodFallback(str, Enum):
    """What to do when a weekly/biweekly cycle has no last pay date."""

    MONTHLY_ANCHOR = "monthly_anchor"
    STRICT = "strict"


@dataclass(frozen=True, slots=True)
class PayPeriod:
    """Inclusive date range between two paydays."""

    start_date: date
    end_date: date

    def contains(self, value: date) -> bool:
        return self.start_date <= value <= self.end_date

    @property
    def days(self) -> int:
        return (self.end_date - self.start_date).days + 1


def _monthly_anchor(year: int, month: int, day_of_month: int) -> date:
    """Payday in the given month; days past month end clamp to the last day."""

    return date(year, month, min(day_of_month, monthrange(year, month)[1]))


def _monthly_period(day_of_month: int, today: date) -> PayPeriod:
    this_month = _monthly_anchor(today.year, today.month, day_of_month)
    if this_month > today:
        previous = add_months(today.replace(day=1), -1)
        start = _monthly_anchor(previous.year, previous.month, day_of_month)
        return PayPeriod(start_date=start, end_date=this_month - timedelta(days=1))

    following = add_months(today.replace(day=1), 1)
    next_payday = _monthly_anchor(following.year, following.month, day_of_month)
    return PayPeriod(start_date=this_month, end_date=next_payday - timedelta(days=1))


def _stepped_period(pay_cycle: PayCycle, today: date) -> PayPeriod:
    step = pay_cadence(pay_cycle.frequency).step
    last_pay = pay_cycle.last_pay_date

    # A last pay date in the future is walked back so the period holds today.
    while last_pay > today:
        last_pay = advance(last_pay, step, -1)

    next_pay = advance(last_pay, step)
    while next_pay <= today:
        next_pay = advance(next_pay, step)

    return PayPeriod(
        start_date=advance(next_pay, step, -1),
        end_date=next_pay - timedelta(days=1),
    )


def get_pay_period(
    pay_cycle: PayCycle | None,
    *,
    today: date | None = None,
    fallback: PayPeriodFallback | str = PayPeriodFallback.MONTHLY_ANCHOR,
) -> PayPeriod:
    """Return the pay period containing *today*.

    Monthly cycles run from one ``day_of_month`` anchor to the day before the
    next one; a payday falling on *today* starts a new period. Weekly and
    biweekly cycles step from ``last_pay_date`` in 7/14-day increments.

    When a weekly/biweekly cycle has no ``last_pay_date`` the ``fallback``
    decides: ``monthly_anchor`` treats ``day_of_month`` as a monthly anchor,
    ``strict`` raises :class:`PayCycleError`.
    """

    today = today or date.today()
    pay_cycle = pay_cycle or PayCycle()
    frequency = PayFrequency(pay_cycle.frequency)

    if frequency is PayFrequency.MONTHLY:
        return _monthly_period(pay_cycle.day_of_month, today)

    if pay_cycle.last_pay_date is None:
        if PayPeriodFallback(fallback) is PayPeriodFallback.STRICT:
            raise PayCycleError(f"A {frequency.value} pay cycle needs a last pay date")
        logger.warning(
            "Pay cycle has no last pay date; using monthly anchor",
            extra={"frequency": frequency.value, "day_of_month": pay_cycle.day_of_month},
        )
        return _monthly_period(pay_cycle.day_of_month, today)

    return _stepped_period(pay_cycle, today)


def next_payday(
    pay_cycle: PayCycle | None,
    *,
    today: date | None = None,
    fallback: PayPeriodFallback | str = PayPeriodFallback.MONTHLY_ANCHOR,
) -> date:
    """Date of the payday that ends the current period."""

    period = get_pay_period(pay_cycle, today=today, fallback=fallback)
    return period.end_date + timedelta(days=1)


def is_within_pay_period(
    value: date,
    pay_cycle: PayCycle | None,
    *,
    today: date | None = None,
    fallback: PayPeriodFallback | str = PayPeriodFallback.MONTHLY_ANCHOR,
) -> bool:
    """Whether *value* falls inside the current pay period."""

    return get_pay_period(pay_cycle, today=today, fallback=fallback).contains(value)


__all__ = [
    "PayPeriod",
    "PayPeriodFallback",
    "get_pay_period",
    "is_within_pay_period",
    "next_payday",
]
