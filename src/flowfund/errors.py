"""Exceptions raised for configuration and programming errors.

Expected edge cases inside the services (paused outgoings, empty windows,
non-positive funds) never raise; they return empty or zero results.
"""

from __future__ import annotations


class FlowFundError(Exception):
    """Base exception for the package."""


class ConfigError(FlowFundError):
    """A configuration value is missing or invalid."""


class PayCycleError(FlowFundError):
    """A pay cycle cannot produce a pay period."""


class RecordError(FlowFundError):
    """A plain-data record could not be decoded."""


class UnknownRecordError(FlowFundError):
    """An update or delete named an id that is not stored."""


class UnknownAccountError(FlowFundError):
    """An outgoing references an account that does not exist."""


class AccountInUseError(FlowFundError):
    """An account cannot be deleted while outgoings reference it."""

    def __init__(self, account_id: str, outgoing_ids: list[str]):
        self.account_id = account_id
        self.outgoing_ids = outgoing_ids
        super().__init__(
            f"Cannot delete account {account_id} with {len(outgoing_ids)} assigned outgoing(s)"
        )


class PaymentPlanNotEligibleError(FlowFundError):
    """The configured eligibility policy refused a payment plan."""


__all__ = [
    "FlowFundError",
    "ConfigError",
    "PayCycleError",
    "RecordError",
    "UnknownRecordError",
    "UnknownAccountError",
    "AccountInUseError",
    "PaymentPlanNotEligibleError",
]
