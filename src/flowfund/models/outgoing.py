"""Tracked payment obligations and their payment plans."""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import field_validator, model_validator
from sqlmodel import Field, SQLModel

from .base import new_id, non_negative_cents
from .cadence import Cadence, cadence_from
from .enums import CustomUnit, InstallmentFrequency, Recurrence


class PaymentPlan(SQLModel):
    """Spread an outgoing over installments that end before its due date.

    ``start_date`` must fall strictly before the outgoing's due date for the
    plan to produce installments; that check lives in the expander so a bad
    plan degrades to "no installments" instead of rejecting the record.
    """

    enabled: bool = Field(default=True)
    start_date: date
    installment_frequency: InstallmentFrequency = Field(default=InstallmentFrequency.MONTHLY)
    installment_amount: Optional[float] = Field(default=None)

    @field_validator("installment_amount")
    @classmethod
    def _clamp_override(cls, value: Optional[float]) -> Optional[float]:
        if value is None:
            return None
        value = non_negative_cents(value)
        return value or None


class Outgoing(SQLModel):
    """A one-time or recurring payment obligation."""

    id: str = Field(default_factory=new_id, min_length=1)
    name: str = Field(min_length=1, max_length=128)
    amount: float = Field(default=0.0)
    due_date: date
    recurrence: Recurrence = Field(default=Recurrence.NONE)
    custom_interval: Optional[int] = Field(default=None, ge=1)
    custom_unit: Optional[CustomUnit] = Field(default=None)
    account_id: str = Field(min_length=1)
    payment_plan: Optional[PaymentPlan] = Field(default=None)
    is_paused: bool = Field(default=False)
    notes: Optional[str] = Field(default=None, max_length=500)

    @field_validator("amount")
    @classmethod
    def _clamp_amount(cls, value: float) -> float:
        return non_negative_cents(value)

    @model_validator(mode="after")
    def _check_custom_fields(self) -> "Outgoing":
        has_custom = self.custom_interval is not None or self.custom_unit is not None
        if self.recurrence is Recurrence.CUSTOM:
            if self.custom_interval is None or self.custom_unit is None:
                raise ValueError("custom recurrence requires custom_interval and custom_unit")
        elif has_custom:
            raise ValueError("custom_interval/custom_unit are only valid with recurrence=custom")
        return self

    @property
    def cadence(self) -> Optional[Cadence]:
        """Tagged recurrence variant, ``None`` for one-time outgoings."""
        return cadence_from(self.recurrence, self.custom_interval, self.custom_unit)

    @property
    def has_active_plan(self) -> bool:
        return self.payment_plan is not None and self.payment_plan.enabled
