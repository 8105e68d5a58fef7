"""Service module exports."""

from . import (
    allocation,
    fund_sources,
    occurrences,
    pay_period,
    plans,
    recurrence,
    serialization,
)

__all__ = [
    "allocation",
    "fund_sources",
    "occurrences",
    "pay_period",
    "plans",
    "recurrence",
    "serialization",
]
