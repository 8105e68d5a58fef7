"""Payment plan installment schedules and eligibility policies."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional

from ..models.cadence import installment_cadence, pay_cadence
from ..models.outgoing import Outgoing, PaymentPlan
from ..models.pay_cycle import PayCycle
from .recurrence import step_forward

PlanEligibilityPolicy = Callable[[Outgoing, PayCycle], bool]


@dataclass(slots=True)
class Installment:
    """A single scheduled partial payment under a plan."""

    index: int
    count: int
    due_date: date
    amount: float

    @property
    def label(self) -> str:
        return f"Installment {self.index} of {self.count}"


def installment_dates(plan: PaymentPlan, due_date: date) -> list[date]:
    """Installment dates from the plan start up to (excluding) *due_date*.

    A plan that does not start strictly before the due date has no
    installments.
    """

    if plan.start_date >= due_date:
        return []
    cadence = installment_cadence(plan.installment_frequency)
    dates: list[date] = []
    current = plan.start_date
    while current < due_date:
        dates.append(current)
        current = step_forward(current, cadence, anchor=plan.start_date)
    return dates


def installment_amount(total: float, count: int, override: Optional[float] = None) -> float:
    """Per-installment amount.

    Without an override the total is divided evenly and rounded *up* to the
    cent, so the installments together never fall short of the total.
    """

    if override is not None and override > 0:
        return round(override, 2)
    if count <= 0:
        return 0.0
    # Round the quotient first so float noise (0.3 * 100 == 30.000000000000004)
    # never adds a cent.
    return math.ceil(round(total / count * 100, 6)) / 100


def build_schedule(outgoing: Outgoing) -> list[Installment]:
    """Full installment schedule for an outgoing's payment plan."""

    plan = outgoing.payment_plan
    if plan is None or not plan.enabled:
        return []
    dates = installment_dates(plan, outgoing.due_date)
    count = len(dates)
    amount = installment_amount(outgoing.amount, count, plan.installment_amount)
    return [
        Installment(index=i, count=count, due_date=d, amount=amount)
        for i, d in enumerate(dates, start=1)
    ]


def _cadence_days(outgoing: Outgoing) -> Optional[int]:
    cadence = outgoing.cadence
    return None if cadence is None else cadence.step.approx_days


def default_plan_eligibility(outgoing: Outgoing, pay_cycle: PayCycle) -> bool:
    """Allow a plan when the bill comes round less often than payday.

    One-time obligations always qualify; recurring ones qualify when their
    cadence is longer than the pay cycle (a quarterly bill on a monthly
    salary, a monthly bill on a weekly wage).
    """

    outgoing_days = _cadence_days(outgoing)
    if outgoing_days is None:
        return True
    return outgoing_days > pay_cadence(pay_cycle.frequency).step.approx_days


def allow_all_plans(outgoing: Outgoing, pay_cycle: PayCycle) -> bool:
    return True


__all__ = [
    "Installment",
    "PlanEligibilityPolicy",
    "allow_all_plans",
    "build_schedule",
    "default_plan_eligibility",
    "installment_amount",
    "installment_dates",
]
