"""Greedy fund allocation across accounts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable, Mapping, Sequence

from ..logging_config import get_logger
from ..models.account import Account
from ..models.allocation import Allocation
from ..models.base import new_id, to_cents

logger = get_logger("services.allocation")


def allocate(
    total_funds: float,
    accounts: Sequence[Account],
    required_per_account: Mapping[str, float],
    *,
    id_factory: Callable[[], str] = new_id,
) -> list[Allocation]:
    """Distribute *total_funds* over *accounts* in the order given.

    Each account with a positive requirement receives ``min(required,
    remaining)`` until the funds run out. There is no look-ahead and no
    proportional split, so reordering ``accounts`` changes the result.
    Accounts that need nothing get no record. The same inputs always produce
    the same account/amount pairs; only the generated ids differ.
    """

    remaining = to_cents(total_funds)
    if remaining <= 0:
        return []

    allocations: list[Allocation] = []
    for account in accounts:
        required = to_cents(required_per_account.get(account.id, 0.0))
        if required <= 0:
            continue
        if remaining <= 0:
            break
        amount = min(required, remaining)
        remaining = to_cents(remaining - amount)
        allocations.append(Allocation(id=id_factory(), account_id=account.id, amount=amount))
        logger.debug(
            "Allocated funds to account",
            extra={"account_id": account.id, "required": required, "amount": amount},
        )

    logger.info(
        "Allocation run complete",
        extra={
            "total_funds": to_cents(total_funds),
            "accounts": len(allocations),
            "unallocated": remaining,
        },
    )
    return allocations


def allocation_for_account(allocations: Iterable[Allocation], account_id: str) -> float:
    """Amount allocated to *account_id*, or 0 when it has none."""

    for allocation in allocations:
        if allocation.account_id == account_id:
            return allocation.amount
    return 0.0


@dataclass(slots=True)
class AllocationSummary:
    """Funding totals for display."""

    total_funds: float
    total_required: float
    total_allocated: float

    @property
    def remaining_to_allocate(self) -> float:
        """Funds left after covering every requirement; negative is a shortfall."""
        return to_cents(self.total_funds - self.total_required)

    @property
    def unallocated(self) -> float:
        return to_cents(self.total_funds - self.total_allocated)

    @property
    def is_fully_funded(self) -> bool:
        return self.total_allocated >= self.total_required

    @property
    def funding_percentage(self) -> float:
        if self.total_required <= 0:
            return 0.0
        return round(self.total_allocated / self.total_required * 100, 1)


def summarize_allocations(
    total_funds: float,
    required_per_account: Mapping[str, float],
    allocations: Iterable[Allocation],
) -> AllocationSummary:
    return AllocationSummary(
        total_funds=to_cents(total_funds),
        total_required=to_cents(sum(required_per_account.values())),
        total_allocated=to_cents(sum(a.amount for a in allocations)),
    )


@dataclass
class ExcessDistribution:
    """Manual top-ups of the surplus left after automatic allocation.

    Amounts are keyed by account id. The manual total never exceeds the
    unallocated funds it was set against.
    """

    amounts: dict[str, float] = field(default_factory=dict)

    @property
    def total(self) -> float:
        return to_cents(sum(self.amounts.values()))

    def amount_for(self, account_id: str) -> float:
        return self.amounts.get(account_id, 0.0)

    def remaining(self, unallocated: float) -> float:
        return to_cents(unallocated - self.total)

    def set_amount(self, account_id: str, value: float, unallocated: float) -> float:
        """Set the manual amount for an account, capped by the surplus.

        Returns the amount actually stored.
        """

        value = max(to_cents(value), 0.0)
        others = to_cents(self.total - self.amount_for(account_id))
        if others + value > unallocated:
            value = max(to_cents(unallocated - others), 0.0)
        self.amounts[account_id] = value
        return value

    def reconcile(self, account_ids: Iterable[str]) -> None:
        """Drop deleted accounts and seed new ones with 0."""

        if all(amount == 0 for amount in self.amounts.values()):
            return
        ids = list(account_ids)
        self.amounts = {account_id: self.amounts.get(account_id, 0.0) for account_id in ids}

    def reset(self) -> None:
        self.amounts = {}


__all__ = [
    "AllocationSummary",
    "ExcessDistribution",
    "allocate",
    "allocation_for_account",
    "summarize_allocations",
]
