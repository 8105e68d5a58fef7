"""Plain-data (JSON) boundary for records and whole-state snapshots.

Keys are camelCase on the wire and snake_case in Python; dates are ISO-8601
strings and money is a plain decimal number (12.5 means 12.50).
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import ValidationError
from sqlmodel import SQLModel

from ..config import BaseConfig
from ..errors import RecordError
from ..logging_config import get_logger
from ..models.account import Account
from ..models.allocation import Allocation
from ..models.base import non_negative_cents
from ..models.fund_source import FundSource
from ..models.outgoing import Outgoing
from ..models.pay_cycle import PayCycle
from .allocation import ExcessDistribution
from .fund_sources import FundSourceLedger
from .pay_period import PayPeriodFallback

if TYPE_CHECKING:  # pragma: no cover
    from ..state import BudgetState

logger = get_logger("services.serialization")

RecordT = TypeVar("RecordT", bound=SQLModel)

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def _to_camel(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def _to_snake(key: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", key).lower()


def _rekey(value: Any, convert) -> Any:
    if isinstance(value, Mapping):
        return {convert(k): _rekey(v, convert) for k, v in value.items()}
    if isinstance(value, list):
        return [_rekey(v, convert) for v in value]
    return value


def dump_record(record: SQLModel) -> dict[str, Any]:
    """Render a record as JSON-compatible camelCase data."""

    return _rekey(record.model_dump(mode="json"), _to_camel)


def _load(model: type[RecordT], data: Mapping[str, Any]) -> RecordT:
    if not isinstance(data, Mapping):
        raise RecordError(f"{model.__name__} record must be a mapping, got {type(data).__name__}")
    try:
        return model.model_validate(_rekey(data, _to_snake))
    except ValidationError as exc:
        raise RecordError(f"Invalid {model.__name__} record: {exc}") from exc


def load_account(data: Mapping[str, Any]) -> Account:
    return _load(Account, data)


def load_outgoing(data: Mapping[str, Any]) -> Outgoing:
    return _load(Outgoing, data)


def load_fund_source(data: Mapping[str, Any]) -> FundSource:
    return _load(FundSource, data)


def load_allocation(data: Mapping[str, Any]) -> Allocation:
    return _load(Allocation, data)


def load_pay_cycle(data: Mapping[str, Any]) -> PayCycle:
    return _load(PayCycle, data)


def _load_manual_allocations(raw: Any, account_ids: set[str]) -> dict[str, float]:
    """Manual top-ups keyed by account id; entries for unknown accounts are dropped."""

    if not raw:
        return {}
    if not isinstance(raw, Mapping):
        raise RecordError(f"manualAllocations must be a mapping, got {type(raw).__name__}")
    manual: dict[str, float] = {}
    for account_id, amount in raw.items():
        if account_id not in account_ids:
            continue
        if isinstance(amount, bool):
            raise RecordError(f"Manual allocation for {account_id} must be a number")
        try:
            manual[str(account_id)] = non_negative_cents(float(amount))
        except (TypeError, ValueError) as exc:
            raise RecordError(
                f"Manual allocation for {account_id} must be a number, got {amount!r}"
            ) from exc
    return manual


def dump_state(state: BudgetState) -> dict[str, Any]:
    """Snapshot every persisted collection of *state*."""

    return {
        "accounts": [dump_record(a) for a in state.accounts],
        "outgoings": [dump_record(o) for o in state.outgoings],
        "fundSources": [dump_record(s) for s in state.ledger.sources],
        "allocations": [dump_record(a) for a in state.allocations],
        "payCycle": dump_record(state.pay_cycle),
        "currency": state.currency,
        "manualAllocations": dict(state.manual.amounts),
    }


def load_state(data: Mapping[str, Any] | None, config: BaseConfig | None = None) -> BudgetState:
    """Rebuild a :class:`BudgetState` from a snapshot.

    Absent keys fall back to defaults. Outgoings that fail to decode, or
    that reference an unknown account, are skipped with a warning so one bad
    row cannot break the totals; any other malformed record raises
    :class:`RecordError`.
    """

    from ..state import BudgetState

    config = config or BaseConfig()
    data = data or {}

    accounts = [load_account(row) for row in data.get("accounts") or []]
    account_ids = {a.id for a in accounts}

    outgoings: list[Outgoing] = []
    for row in data.get("outgoings") or []:
        try:
            outgoing = load_outgoing(row)
        except RecordError as exc:
            logger.warning("Skipping malformed outgoing", extra={"error": str(exc)})
            continue
        if outgoing.account_id not in account_ids:
            logger.warning(
                "Skipping outgoing with unknown account",
                extra={"outgoing_id": outgoing.id, "account_id": outgoing.account_id},
            )
            continue
        outgoings.append(outgoing)

    raw_cycle = data.get("payCycle")
    pay_cycle = load_pay_cycle(raw_cycle) if raw_cycle else config.default_pay_cycle()

    manual = _load_manual_allocations(data.get("manualAllocations"), account_ids)

    return BudgetState(
        accounts=accounts,
        outgoings=outgoings,
        ledger=FundSourceLedger(load_fund_source(row) for row in data.get("fundSources") or []),
        allocations=[load_allocation(row) for row in data.get("allocations") or []],
        pay_cycle=pay_cycle,
        currency=(data.get("currency") or config.DEFAULT_CURRENCY).upper(),
        manual=ExcessDistribution(amounts=manual),
        pay_period_fallback=PayPeriodFallback(config.PAY_PERIOD_FALLBACK),
    )


def dumps_state(state: BudgetState, *, indent: int | None = 2) -> str:
    return json.dumps(dump_state(state), indent=indent)


def loads_state(text: str, config: BaseConfig | None = None) -> BudgetState:
    try:
        data = json.loads(text) if text.strip() else {}
    except json.JSONDecodeError as exc:
        raise RecordError(f"State snapshot is not valid JSON: {exc}") from exc
    if not isinstance(data, Mapping):
        raise RecordError("State snapshot must be a JSON object")
    return load_state(data, config)


__all__ = [
    "dump_record",
    "dump_state",
    "dumps_state",
    "load_account",
    "load_allocation",
    "load_fund_source",
    "load_outgoing",
    "load_pay_cycle",
    "load_state",
    "loads_state",
]
