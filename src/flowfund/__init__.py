"""FlowFund pay-period budgeting package."""

from __future__ import annotations

from .config import BaseConfig, DevConfig
from .state import BudgetState, DerivedState, apply, create_state, recompute, reset_funds

__all__ = [
    "BaseConfig",
    "DevConfig",
    "BudgetState",
    "DerivedState",
    "apply",
    "create_state",
    "recompute",
    "reset_funds",
]
