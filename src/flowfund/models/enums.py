"""Enumerations shared by the record models."""

from __future__ import annotations

from enum import Enum


class Recurrence(str, Enum):
    """How often an outgoing repeats."""

    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"
    CUSTOM = "custom"


class CustomUnit(str, Enum):
    """Calendar unit of a custom recurrence interval."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class InstallmentFrequency(str, Enum):
    """Cadence at which payment-plan installments fall due."""

    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"


class PayFrequency(str, Enum):
    """How often the user is paid."""

    MONTHLY = "monthly"
    BIWEEKLY = "biweekly"
    WEEKLY = "weekly"
