"""Pay cycle configuration."""

from __future__ import annotations

from datetime import date
from typing import Optional

from sqlmodel import Field, SQLModel

from .enums import PayFrequency


class PayCycle(SQLModel):
    """When the user gets paid.

    ``day_of_month`` anchors monthly cycles; ``last_pay_date`` anchors weekly
    and biweekly ones.
    """

    day_of_month: int = Field(default=28, ge=1, le=31)
    frequency: PayFrequency = Field(default=PayFrequency.MONTHLY)
    last_pay_date: Optional[date] = Field(default=None)
