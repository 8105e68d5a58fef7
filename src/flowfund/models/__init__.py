"""Record model exports."""

from .account import Account
from .allocation import Allocation
from .base import new_id
from .cadence import Cadence, CadenceStep, CustomCadence, FixedCadence, cadence_from
from .enums import CustomUnit, InstallmentFrequency, PayFrequency, Recurrence
from .fund_source import FundSource
from .outgoing import Outgoing, PaymentPlan
from .pay_cycle import PayCycle

__all__ = [
    "Account",
    "Allocation",
    "Cadence",
    "CadenceStep",
    "CustomCadence",
    "CustomUnit",
    "FixedCadence",
    "FundSource",
    "InstallmentFrequency",
    "Outgoing",
    "PayCycle",
    "PayFrequency",
    "PaymentPlan",
    "Recurrence",
    "cadence_from",
    "new_id",
]
