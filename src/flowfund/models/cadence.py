"""Tagged recurrence variants.

A record stores ``recurrence`` plus optional ``custom_interval``/``custom_unit``;
the services only ever see one of the variants below (or ``None`` for a
one-time obligation), so the "are these fields consistent" question is settled
once, at the record boundary.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from .enums import CustomUnit, InstallmentFrequency, PayFrequency, Recurrence


@dataclass(frozen=True, slots=True)
class CadenceStep:
    """Size of one cadence period in calendar units."""

    days: int = 0
    months: int = 0

    @property
    def approx_days(self) -> int:
        """Rough period length, used only to compare cadences."""
        return self.days + self.months * 30


_FIXED_STEPS = {
    Recurrence.DAILY: CadenceStep(days=1),
    Recurrence.WEEKLY: CadenceStep(days=7),
    Recurrence.BIWEEKLY: CadenceStep(days=14),
    Recurrence.MONTHLY: CadenceStep(months=1),
    Recurrence.QUARTERLY: CadenceStep(months=3),
    Recurrence.YEARLY: CadenceStep(months=12),
}


@dataclass(frozen=True, slots=True)
class FixedCadence:
    """One of the named cadences (daily .. yearly)."""

    recurrence: Recurrence

    def __post_init__(self) -> None:
        object.__setattr__(self, "recurrence", Recurrence(self.recurrence))
        if self.recurrence not in _FIXED_STEPS:
            raise ValueError(f"{self.recurrence!r} is not a fixed cadence")

    @property
    def step(self) -> CadenceStep:
        return _FIXED_STEPS[self.recurrence]


@dataclass(frozen=True, slots=True)
class CustomCadence:
    """Every ``interval`` units of ``unit``."""

    interval: int
    unit: CustomUnit

    def __post_init__(self) -> None:
        object.__setattr__(self, "unit", CustomUnit(self.unit))
        if self.interval < 1:
            raise ValueError("custom interval must be a positive integer")

    @property
    def step(self) -> CadenceStep:
        if self.unit is CustomUnit.DAY:
            return CadenceStep(days=self.interval)
        if self.unit is CustomUnit.WEEK:
            return CadenceStep(days=7 * self.interval)
        if self.unit is CustomUnit.MONTH:
            return CadenceStep(months=self.interval)
        return CadenceStep(months=12 * self.interval)


Cadence = Union[FixedCadence, CustomCadence]


def cadence_from(
    recurrence: Recurrence,
    interval: Optional[int] = None,
    unit: Optional[CustomUnit] = None,
) -> Optional[Cadence]:
    """Build the tagged variant for a record's recurrence fields.

    Returns ``None`` for one-time obligations.
    """

    recurrence = Recurrence(recurrence)
    if recurrence is Recurrence.CUSTOM:
        if interval is None or unit is None:
            raise ValueError("custom recurrence requires both interval and unit")
        return CustomCadence(interval=int(interval), unit=CustomUnit(unit))
    if recurrence is Recurrence.NONE:
        return None
    return FixedCadence(recurrence)


def installment_cadence(frequency: InstallmentFrequency) -> FixedCadence:
    """Cadence at which payment-plan installments fall due."""

    return FixedCadence(Recurrence(InstallmentFrequency(frequency).value))


def pay_cadence(frequency: PayFrequency) -> FixedCadence:
    """Cadence of a pay cycle."""

    return FixedCadence(Recurrence(PayFrequency(frequency).value))
