"""Pytest configuration and shared fixtures for FlowFund tests.

Provides record factories and helpers so service tests can build accounts,
outgoings and states without repeating boilerplate. Every fixture pins
``today`` explicitly; nothing here depends on the wall clock.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

import pytest

from flowfund.config import TestingConfig
from flowfund.models import (
    Account,
    CustomUnit,
    InstallmentFrequency,
    Outgoing,
    PayCycle,
    PaymentPlan,
    Recurrence,
)
from flowfund.state import BudgetState

# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def config(tmp_path) -> TestingConfig:
    """Configuration writing logs under a temporary directory."""

    return TestingConfig(data_dir=tmp_path)


@pytest.fixture
def today() -> date:
    """Fixed reference date used across service tests."""

    return date(2024, 6, 1)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def account_factory():
    """Factory for creating test accounts.

    Returns:
        Callable: Function that creates Account records
    """

    def _create_account(
        name: str = "Bills",
        account_id: Optional[str] = None,
        description: str = "",
        color_tag: str = "#6366f1",
    ) -> Account:
        kwargs = {"name": name, "description": description, "color_tag": color_tag}
        if account_id is not None:
            kwargs["id"] = account_id
        return Account(**kwargs)

    return _create_account


@pytest.fixture
def outgoing_factory():
    """Factory for creating test outgoings.

    Returns:
        Callable: Function that creates Outgoing records
    """

    def _create_outgoing(
        name: str = "Rent",
        amount: float = 100.0,
        due_date: date = date(2024, 1, 1),
        recurrence: Recurrence | str = Recurrence.NONE,
        account_id: str = "acct-1",
        custom_interval: Optional[int] = None,
        custom_unit: CustomUnit | str | None = None,
        payment_plan: Optional[PaymentPlan] = None,
        is_paused: bool = False,
        outgoing_id: Optional[str] = None,
    ) -> Outgoing:
        """Create a test outgoing with sensible defaults.

        Args:
            name: Display name
            amount: Amount per occurrence
            due_date: First due date (anchor of the cadence)
            recurrence: Recurrence type
            account_id: Account the outgoing is assigned to
            custom_interval: Interval for custom recurrence
            custom_unit: Unit for custom recurrence
            payment_plan: Optional installment plan
            is_paused: Whether the outgoing is paused

        Returns:
            Outgoing: New record
        """
        kwargs = dict(
            name=name,
            amount=amount,
            due_date=due_date,
            recurrence=recurrence,
            account_id=account_id,
            custom_interval=custom_interval,
            custom_unit=custom_unit,
            payment_plan=payment_plan,
            is_paused=is_paused,
        )
        if outgoing_id is not None:
            kwargs["id"] = outgoing_id
        return Outgoing(**kwargs)

    return _create_outgoing


@pytest.fixture
def plan_factory():
    """Factory for creating payment plans."""

    def _create_plan(
        start_date: date = date(2024, 1, 1),
        installment_frequency: InstallmentFrequency | str = InstallmentFrequency.MONTHLY,
        installment_amount: Optional[float] = None,
        enabled: bool = True,
    ) -> PaymentPlan:
        return PaymentPlan(
            start_date=start_date,
            installment_frequency=installment_frequency,
            installment_amount=installment_amount,
            enabled=enabled,
        )

    return _create_plan


@pytest.fixture
def populated_state(account_factory, outgoing_factory) -> BudgetState:
    """State with two accounts, three outgoings and 500.00 of funds.

    Pay cycle is monthly on the 1st, so on 2024-06-01 the period is
    2024-06-01 .. 2024-06-30.
    """

    bills = account_factory(name="Bills", account_id="bills")
    fun = account_factory(name="Fun", account_id="fun")
    state = BudgetState(pay_cycle=PayCycle(day_of_month=1))
    state.add_account(bills)
    state.add_account(fun)
    state.add_outgoing(
        outgoing_factory(
            name="Rent",
            amount=400.0,
            due_date=date(2024, 1, 5),
            recurrence=Recurrence.MONTHLY,
            account_id="bills",
            outgoing_id="rent",
        )
    )
    state.add_outgoing(
        outgoing_factory(
            name="Gym",
            amount=25.0,
            due_date=date(2024, 5, 6),
            recurrence=Recurrence.WEEKLY,
            account_id="fun",
            outgoing_id="gym",
        )
    )
    state.add_outgoing(
        outgoing_factory(
            name="Concert",
            amount=60.0,
            due_date=date(2024, 6, 20),
            account_id="fun",
            outgoing_id="concert",
        )
    )
    state.ledger.add(300.0)
    state.ledger.add(200.0)
    return state


# =============================================================================
# Helper Functions
# =============================================================================


def assert_float_equal(actual: float, expected: float, tolerance: float = 0.005):
    """Assert that two money amounts are equal within a tolerance.

    Args:
        actual: Actual value
        expected: Expected value
        tolerance: Maximum allowed difference (default half a cent)

    Raises:
        AssertionError: If values differ by more than tolerance
    """
    assert (
        abs(actual - expected) < tolerance
    ), f"Expected {expected}, got {actual} (diff: {abs(actual - expected)})"
