"""Ledger of fund sources that make up the available funds."""

from __future__ import annotations

from typing import Iterable, Iterator, Optional

from ..logging_config import get_logger
from ..models.base import non_negative_cents, to_cents
from ..models.fund_source import FundSource

logger = get_logger("services.fund_sources")


class FundSourceLedger:
    """Ordered set of fund sources.

    The total is always computed from the sources, never stored. Sources are
    replaced as whole records; amounts below zero (or NaN) are clamped to 0.
    """

    def __init__(self, sources: Iterable[FundSource] = ()):
        self._sources: list[FundSource] = list(sources)

    def __len__(self) -> int:
        return len(self._sources)

    def __iter__(self) -> Iterator[FundSource]:
        return iter(tuple(self._sources))

    @property
    def sources(self) -> tuple[FundSource, ...]:
        return tuple(self._sources)

    def total(self) -> float:
        return to_cents(sum(source.amount for source in self._sources))

    def get(self, source_id: str) -> Optional[FundSource]:
        for source in self._sources:
            if source.id == source_id:
                return source
        return None

    def add(self, amount: float) -> FundSource:
        """Append a new source and return it."""

        source = FundSource(amount=non_negative_cents(amount))
        self._sources.append(source)
        return source

    def update(self, source_id: str, amount: float) -> Optional[FundSource]:
        """Replace the amount of an existing source.

        Returns the new record, or ``None`` when the id is unknown.
        """

        for position, source in enumerate(self._sources):
            if source.id == source_id:
                replacement = FundSource(id=source.id, amount=non_negative_cents(amount))
                self._sources[position] = replacement
                return replacement
        logger.debug("Ignoring update for unknown fund source", extra={"source_id": source_id})
        return None

    def delete(self, source_id: str) -> bool:
        """Remove a source; returns whether anything was removed."""

        before = len(self._sources)
        self._sources = [source for source in self._sources if source.id != source_id]
        return len(self._sources) < before

    def reset_all(self) -> str:
        """Replace every source with a single zero-amount one.

        The ledger is never left empty so there is always one input row to
        edit. Returns the id of the new source.
        """

        source = FundSource(amount=0.0)
        self._sources = [source]
        logger.info("Fund sources reset", extra={"source_id": source.id})
        return source.id

    def set_total(self, amount: float) -> float:
        """Make the total match *amount*.

        With no sources one is created; with one it is overwritten; with
        several the first absorbs the difference (never going below 0, in
        which case the total ends up above *amount*). Returns the new total.
        """

        amount = non_negative_cents(amount)
        if not self._sources:
            self.add(amount)
        elif len(self._sources) == 1:
            self.update(self._sources[0].id, amount)
        else:
            first = self._sources[0]
            adjustment = amount - self.total()
            self.update(first.id, first.amount + adjustment)
        return self.total()


__all__ = ["FundSourceLedger"]
