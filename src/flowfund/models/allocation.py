"""Funds assigned to an account by an allocation run."""

from __future__ import annotations

from pydantic import field_validator
from sqlmodel import Field, SQLModel

from .base import new_id, non_negative_cents


class Allocation(SQLModel):
    """Amount of available funds assigned to one account."""

    id: str = Field(default_factory=new_id, min_length=1)
    account_id: str = Field(min_length=1)
    amount: float = Field(default=0.0)

    @field_validator("amount")
    @classmethod
    def _clamp_amount(cls, value: float) -> float:
        return non_negative_cents(value)
