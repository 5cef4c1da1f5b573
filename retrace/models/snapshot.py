"""Scanner state snapshots published to the display layer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

from ..core.enums import BatchState, Granularity
from .result import TradingPairResult


class RefreshOutcome(NamedTuple):
    """What a display consumer needs after a refresh: loading flag and rows."""

    loading: bool
    pairs: list[TradingPairResult]


@dataclass(frozen=True)
class ScanSnapshot:
    """Atomically replaced view of one refresh cycle.

    ``results`` holds every analysed symbol in symbol-list order;
    ``displayed`` applies the inclusion rule on top of it.
    """

    state: BatchState
    generation: int
    granularity: Granularity | None = None
    results: tuple[TradingPairResult, ...] = ()
    error: str | None = None

    @property
    def loading(self) -> bool:
        return self.state == BatchState.FETCHING

    @property
    def displayed(self) -> list[TradingPairResult]:
        if self.state != BatchState.READY:
            return []
        return [result for result in self.results if result.is_included]

    def as_outcome(self) -> RefreshOutcome:
        """Collapse the snapshot into the ``(loading, pairs)`` pair."""
        return RefreshOutcome(loading=self.loading, pairs=self.displayed)

    @classmethod
    def idle(cls) -> ScanSnapshot:
        return cls(state=BatchState.IDLE, generation=0)
