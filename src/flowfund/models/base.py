"""Helpers shared by the record models."""

from __future__ import annotations

import math
import uuid


def new_id() -> str:
    """Return a fresh record identifier."""

    return str(uuid.uuid4())


def to_cents(amount: float) -> float:
    """Round a money amount to cents (half-up), mapping NaN and infinities to 0."""

    if amount is None or not math.isfinite(amount):
        return 0.0
    return round(float(amount) + 1e-9, 2)


def non_negative_cents(amount: float) -> float:
    """Clamp negative or non-finite amounts to 0 and round to cents."""

    value = to_cents(amount)
    return value if value > 0 else 0.0
