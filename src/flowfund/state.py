"""Application state store and the pure recompute step.

``BudgetState`` owns the entity collections. Services never reach into it;
callers run :func:`recompute` after a change and install the result with
:func:`apply`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Optional

from .config import BaseConfig
from .errors import (
    AccountInUseError,
    PaymentPlanNotEligibleError,
    UnknownAccountError,
    UnknownRecordError,
)
from .logging_config import get_logger
from .models.account import Account
from .models.allocation import Allocation
from .models.base import new_id
from .models.outgoing import Outgoing
from .models.pay_cycle import PayCycle
from .services.allocation import (
    AllocationSummary,
    ExcessDistribution,
    allocate,
    allocation_for_account,
    summarize_allocations,
)
from .services.fund_sources import FundSourceLedger
from .services.occurrences import Occurrence, expand_all, required_per_account
from .services.pay_period import PayPeriod, PayPeriodFallback, get_pay_period
from .services.plans import PlanEligibilityPolicy, default_plan_eligibility

logger = get_logger("state")


@dataclass
class BudgetState:
    """Entity collections plus the settings the services need."""

    accounts: list[Account] = field(default_factory=list)
    outgoings: list[Outgoing] = field(default_factory=list)
    ledger: FundSourceLedger = field(default_factory=FundSourceLedger)
    allocations: list[Allocation] = field(default_factory=list)
    pay_cycle: PayCycle = field(default_factory=PayCycle)
    currency: str = "USD"
    manual: ExcessDistribution = field(default_factory=ExcessDistribution)
    pay_period_fallback: PayPeriodFallback = PayPeriodFallback.MONTHLY_ANCHOR
    plan_policy: PlanEligibilityPolicy = default_plan_eligibility

    # Accounts

    def account_by_id(self, account_id: str) -> Optional[Account]:
        return next((a for a in self.accounts if a.id == account_id), None)

    def add_account(self, account: Account) -> Account:
        self.accounts = [*self.accounts, account]
        return account

    def update_account(self, account: Account) -> Account:
        if self.account_by_id(account.id) is None:
            raise UnknownRecordError(f"Account {account.id} does not exist")
        self.accounts = [account if a.id == account.id else a for a in self.accounts]
        return account

    def delete_account(self, account_id: str) -> None:
        """Remove an account that no outgoing references."""

        in_use = [o.id for o in self.outgoings if o.account_id == account_id]
        if in_use:
            raise AccountInUseError(account_id, in_use)
        self.accounts = [a for a in self.accounts if a.id != account_id]
        self.manual.reconcile(a.id for a in self.accounts)

    # Outgoings

    def outgoing_by_id(self, outgoing_id: str) -> Optional[Outgoing]:
        return next((o for o in self.outgoings if o.id == outgoing_id), None)

    def outgoings_for_account(self, account_id: str) -> list[Outgoing]:
        return [o for o in self.outgoings if o.account_id == account_id]

    def _check_outgoing(self, outgoing: Outgoing) -> None:
        if self.account_by_id(outgoing.account_id) is None:
            raise UnknownAccountError(
                f"Outgoing {outgoing.id} references unknown account {outgoing.account_id}"
            )
        if outgoing.has_active_plan and not self.plan_policy(outgoing, self.pay_cycle):
            raise PaymentPlanNotEligibleError(
                f"A payment plan is not available for {outgoing.name!r} on this pay cycle"
            )

    def add_outgoing(self, outgoing: Outgoing) -> Outgoing:
        self._check_outgoing(outgoing)
        self.outgoings = [*self.outgoings, outgoing]
        return outgoing

    def update_outgoing(self, outgoing: Outgoing) -> Outgoing:
        if self.outgoing_by_id(outgoing.id) is None:
            raise UnknownRecordError(f"Outgoing {outgoing.id} does not exist")
        self._check_outgoing(outgoing)
        self.outgoings = [outgoing if o.id == outgoing.id else o for o in self.outgoings]
        return outgoing

    def delete_outgoing(self, outgoing_id: str) -> bool:
        before = len(self.outgoings)
        self.outgoings = [o for o in self.outgoings if o.id != outgoing_id]
        return len(self.outgoings) < before

    def set_paused(self, outgoing_id: str, paused: bool) -> Outgoing:
        """Pause or resume an outgoing by replacing its record."""

        current = self.outgoing_by_id(outgoing_id)
        if current is None:
            raise UnknownRecordError(f"Outgoing {outgoing_id} does not exist")
        replacement = Outgoing.model_validate({**current.model_dump(), "is_paused": paused})
        self.outgoings = [replacement if o.id == outgoing_id else o for o in self.outgoings]
        return replacement

    # Settings and funds

    def update_pay_cycle(self, pay_cycle: PayCycle) -> None:
        self.pay_cycle = pay_cycle

    def update_currency(self, currency: str) -> None:
        self.currency = currency.strip().upper()

    @property
    def total_funds(self) -> float:
        return self.ledger.total()

    def allocation_for_account(self, account_id: str) -> float:
        return allocation_for_account(self.allocations, account_id)


@dataclass(slots=True)
class DerivedState:
    """Values computed from a :class:`BudgetState` for one moment in time."""

    pay_period: PayPeriod
    required: dict[str, float]
    allocations: list[Allocation]
    summary: AllocationSummary
    occurrences: list[Occurrence]


def recompute(
    state: BudgetState,
    *,
    today: date | None = None,
    id_factory: Callable[[], str] = new_id,
) -> DerivedState:
    """Derive pay period, requirements and allocations without touching *state*."""

    today = today or date.today()
    period = get_pay_period(state.pay_cycle, today=today, fallback=state.pay_period_fallback)
    required = required_per_account(
        state.outgoings, period.start_date, period.end_date, today=today
    )
    total_funds = state.ledger.total()
    allocations = allocate(total_funds, state.accounts, required, id_factory=id_factory)
    return DerivedState(
        pay_period=period,
        required=required,
        allocations=allocations,
        summary=summarize_allocations(total_funds, required, allocations),
        occurrences=expand_all(state.outgoings, period.start_date, period.end_date, today=today),
    )


def apply(state: BudgetState, derived: DerivedState) -> None:
    """Install freshly computed allocations, replacing the previous set."""

    state.allocations = list(derived.allocations)
    state.manual.reconcile(a.id for a in state.accounts)
    if derived.summary.unallocated <= 0:
        state.manual.reset()


def reset_funds(state: BudgetState) -> str:
    """Start over with a single empty fund source and no allocations."""

    source_id = state.ledger.reset_all()
    state.allocations = []
    state.manual.reset()
    return source_id


def create_state(config: BaseConfig | None = None) -> BudgetState:
    """Empty state carrying the configured defaults."""

    config = config or BaseConfig()
    return BudgetState(
        pay_cycle=config.default_pay_cycle(),
        currency=config.DEFAULT_CURRENCY,
        pay_period_fallback=PayPeriodFallback(config.PAY_PERIOD_FALLBACK),
    )


__all__ = [
    "BudgetState",
    "DerivedState",
    "apply",
    "create_state",
    "recompute",
    "reset_funds",
]
