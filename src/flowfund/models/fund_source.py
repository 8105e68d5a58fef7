"""Contribution to the pool of available funds."""

from __future__ import annotations

from pydantic import field_validator
from sqlmodel import Field, SQLModel

from .base import new_id, non_negative_cents


class FundSource(SQLModel):
    """One anonymous contribution; the ledger total is the sum of these."""

    id: str = Field(default_factory=new_id, min_length=1)
    amount: float = Field(default=0.0)

    @field_validator("amount")
    @classmethod
    def _clamp_amount(cls, value: float) -> float:
        return non_negative_cents(value)
