"""Batch orchestrator for the USDT retracement scan.

One refresh cycle fetches the symbol universe, fans out one candle retrieval
per symbol on the running event loop and joins them all before anything is
committed:

- Idle -> Fetching -> Ready, or Failed when the symbol list is unavailable
- every per-symbol task returns a tagged FetchOutcome and never raises, so a
  single bad symbol cannot abort the batch
- results are merged in symbol-list order, never completion order
- each cycle carries a generation number; a cycle only commits if no newer
  refresh started meanwhile, so a slow stale batch never overwrites a fresh one

Notes:
- The display layer reads either ``snapshot`` or the ``(loading, pairs)``
  tuple returned by ``refresh``; it never sees partially merged results.
- Retries are left to the candle source.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from ..analysis import analyze_window, normalize_window
from ..core import (
    BatchState,
    CandleSource,
    EmptyWindow,
    Granularity,
    ScanError,
    ScanSettings,
    SourceUnavailable,
)
from ..models import RefreshOutcome, ScanSnapshot, Symbol, TradingPairResult

logger = logging.getLogger(__name__)

T = TypeVar("T")

Listener = Callable[[ScanSnapshot], Awaitable[None]] | Callable[[ScanSnapshot], None]


@dataclass(frozen=True)
class FetchOutcome:
    """Tagged result of one symbol's retrieval and analysis."""

    symbol: Symbol
    result: TradingPairResult | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.result is not None


class RetracementScanner:
    """Scan every quote-asset pair of a candle source for 97% retracements."""

    def __init__(self, source: CandleSource, settings: ScanSettings | None = None) -> None:
        self._source = source
        self._settings = settings or ScanSettings()
        self._generation = 0
        self._snapshot = ScanSnapshot.idle()
        self._listeners: list[Listener] = []
        self._refresh_task: asyncio.Task | None = None

    @property
    def settings(self) -> ScanSettings:
        return self._settings

    @property
    def generation(self) -> int:
        """Generation of the most recently started refresh."""
        return self._generation

    @property
    def snapshot(self) -> ScanSnapshot:
        """Last committed snapshot."""
        return self._snapshot

    # ----------------------
    # Listeners
    # ----------------------
    def add_listener(self, callback: Listener) -> None:
        """Register a callback invoked with every committed snapshot."""
        self._listeners.append(callback)

    def remove_listener(self, callback: Listener) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    async def _publish(self, snapshot: ScanSnapshot) -> None:
        self._snapshot = snapshot
        for callback in list(self._listeners):
            try:
                result = callback(snapshot)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.error(f"Snapshot listener failed: {e}", exc_info=True)

    # ----------------------
    # Refresh cycle
    # ----------------------
    async def refresh(self, granularity: Granularity | str) -> RefreshOutcome:
        """Run one full scan at ``granularity`` and return ``(loading, pairs)``.

        If a newer refresh starts before this one settles, this cycle's
        results are discarded and the returned tuple reflects the newer
        state (usually still loading).
        """
        granularity = _coerce_granularity(granularity)
        self._generation += 1
        generation = self._generation
        logger.debug(f"Starting refresh generation={generation} granularity={granularity}")
        await self._publish(
            ScanSnapshot(state=BatchState.FETCHING, generation=generation, granularity=granularity)
        )

        try:
            snapshot = await self._run_batch(generation, granularity)
        except asyncio.CancelledError:
            if generation == self._generation:
                await self._publish(
                    ScanSnapshot(state=BatchState.IDLE, generation=generation, granularity=granularity)
                )
            raise

        if generation != self._generation:
            logger.info(
                f"Discarding stale refresh generation={generation} "
                f"(current generation={self._generation})"
            )
            return self._snapshot.as_outcome()

        await self._publish(snapshot)
        return snapshot.as_outcome()

    def select_granularity(self, granularity: Granularity | str) -> asyncio.Task:
        """Start a background refresh, cancelling the previous in-flight one.

        Intended for display layers reacting to a user selection. Must be
        called from a running event loop.
        """
        if self._refresh_task is not None and not self._refresh_task.done():
            self._refresh_task.cancel()
        self._refresh_task = asyncio.create_task(self.refresh(granularity))
        return self._refresh_task

    async def _run_batch(self, generation: int, granularity: Granularity) -> ScanSnapshot:
        quote_asset = self._settings.quote_asset
        try:
            symbols = await self._bounded(
                self._source.get_symbols(quote_asset), f"{quote_asset} symbol list"
            )
        except Exception as e:
            logger.error(f"Symbol list unavailable, refresh failed: {e}", exc_info=True)
            return ScanSnapshot(
                state=BatchState.FAILED,
                generation=generation,
                granularity=granularity,
                error=str(e) or type(e).__name__,
            )

        semaphore = asyncio.Semaphore(self._settings.max_concurrency)
        outcomes = await asyncio.gather(
            *(self._scan_symbol(symbol, granularity, semaphore) for symbol in symbols)
        )

        results = tuple(outcome.result for outcome in outcomes if outcome.result is not None)
        failed = len(outcomes) - len(results)
        logger.info(
            f"Refresh generation={generation} scanned {len(results)} of {len(symbols)} "
            f"{quote_asset} pairs at {granularity} ({failed} excluded)"
        )
        return ScanSnapshot(
            state=BatchState.READY,
            generation=generation,
            granularity=granularity,
            results=results,
        )

    async def _scan_symbol(
        self,
        symbol: Symbol,
        granularity: Granularity,
        semaphore: asyncio.Semaphore,
    ) -> FetchOutcome:
        window_size = self._settings.window_size
        try:
            async with semaphore:
                rows = await self._bounded(
                    self._source.fetch_candles(symbol.symbol, granularity, window_size),
                    f"candles for {symbol.symbol}",
                )
            window = normalize_window(rows, symbol=symbol.symbol)[-window_size:]
            if not window:
                raise EmptyWindow(f"No usable candles for {symbol.symbol}", symbol=symbol.symbol)
            return FetchOutcome(symbol=symbol, result=analyze_window(symbol, window, self._settings))
        except ScanError as e:
            logger.warning(f"Excluding {symbol.symbol}: {e}")
            return FetchOutcome(symbol=symbol, error=e)
        except Exception as e:
            logger.error(f"Unexpected error scanning {symbol.symbol}: {e}", exc_info=True)
            return FetchOutcome(symbol=symbol, error=e)

    async def _bounded(self, awaitable: Awaitable[T], what: str) -> T:
        timeout = self._settings.request_timeout
        try:
            return await asyncio.wait_for(awaitable, timeout=timeout)
        except asyncio.TimeoutError as e:
            raise SourceUnavailable(f"Timed out after {timeout}s fetching {what}") from e

    # ----------------------
    # Lifecycle
    # ----------------------
    async def close(self) -> None:
        """Cancel any background refresh and close the candle source."""
        if self._refresh_task is not None and not self._refresh_task.done():
            self._refresh_task.cancel()
            try:
                await self._refresh_task
            except asyncio.CancelledError:
                pass
        await self._source.close()

    async def __aenter__(self) -> RetracementScanner:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()


def _coerce_granularity(granularity: Granularity | str) -> Granularity:
    if isinstance(granularity, Granularity):
        return granularity
    parsed = Granularity.from_str(granularity)
    if parsed is None:
        raise ValueError(f"Invalid granularity: {granularity}")
    return parsed
