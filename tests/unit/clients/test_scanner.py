"""Unit tests for RetracementScanner behavior with a fake candle source."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import Any

import pytest

from retrace.clients import RetracementScanner
from retrace.core import (
    BatchState,
    CandleSource,
    Granularity,
    ScanSettings,
    SourceUnavailable,
)
from retrace.models import RefreshOutcome, ScanSnapshot, Symbol


def _symbol(base: str, quote: str = "USDT") -> Symbol:
    return Symbol(symbol=f"{base}{quote}", base_asset=base, quote_asset=quote)


class FakeSource(CandleSource):
    """In-memory candle source with per-symbol delays and failures."""

    def __init__(
        self,
        symbols: list[Symbol],
        candles: dict[str, Any],
        *,
        symbol_error: Exception | None = None,
        symbol_delay: float = 0.0,
        delays: dict[str, float] | None = None,
        granularity_delays: dict[Granularity, float] | None = None,
        errors: dict[str, Exception] | None = None,
    ) -> None:
        super().__init__(name="fake")
        self.symbols = symbols
        self.candles = candles
        self.symbol_error = symbol_error
        self.symbol_delay = symbol_delay
        self.delays = delays or {}
        self.granularity_delays = granularity_delays or {}
        self.errors = errors or {}
        self.calls: list[tuple[str, Granularity, int]] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.closed = False

    async def get_symbols(self, quote_asset: str) -> list[Symbol]:
        if self.symbol_delay:
            await asyncio.sleep(self.symbol_delay)
        if self.symbol_error is not None:
            raise self.symbol_error
        return [s for s in self.symbols if s.quote_asset == quote_asset]

    async def fetch_candles(
        self, symbol: str, granularity: Granularity, limit: int
    ) -> list[Sequence[Any]]:
        self.calls.append((symbol, granularity, limit))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            delay = self.delays.get(symbol, 0.0) + self.granularity_delays.get(granularity, 0.0)
            await asyncio.sleep(delay)
            if symbol in self.errors:
                raise self.errors[symbol]
            payload = self.candles[symbol]
            if isinstance(payload, dict) and granularity in payload:
                return payload[granularity]
            return payload
        finally:
            self.in_flight -= 1

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def rows(row_factory):
    def build(highs, lows=None):
        lows = lows or [h - 1 for h in highs]
        return [row_factory(i, h, low) for i, (h, low) in enumerate(zip(highs, lows))]

    return build


@pytest.mark.asyncio
async def test_refresh_returns_displayed_pairs_in_symbol_order(rows):
    symbols = [_symbol("AAA"), _symbol("BBB"), _symbol("CCC"), _symbol("DDD")]
    source = FakeSource(
        symbols,
        {
            "AAAUSDT": rows([10, 14.6, 15, 11]),  # pulled back into band -> included
            "BBBUSDT": rows([10, 12, 15, 11, 9]),  # still at peak -> excluded
            "CCCUSDT": rows([20, 14.6, 15]),  # reference first -> excluded
            "DDDUSDT": rows([5, 5.5, 5.2]),  # first band candle is the reference -> excluded
        },
        delays={"AAAUSDT": 0.05, "BBBUSDT": 0.03, "CCCUSDT": 0.01},
    )
    scanner = RetracementScanner(source)

    outcome = await scanner.refresh(Granularity.HOUR)

    assert isinstance(outcome, RefreshOutcome)
    assert outcome.loading is False
    assert [p.pair for p in outcome.pairs] == ["AAA-USDT"]
    assert outcome.pairs[0].threshold_high == 14.6

    snapshot = scanner.snapshot
    assert snapshot.state == BatchState.READY
    assert snapshot.granularity == Granularity.HOUR
    assert [r.symbol.symbol for r in snapshot.results] == [
        "AAAUSDT",
        "BBBUSDT",
        "CCCUSDT",
        "DDDUSDT",
    ]


@pytest.mark.asyncio
async def test_failing_symbols_are_excluded_without_aborting_batch(rows):
    symbols = [_symbol(b) for b in ("AAA", "BAD", "DICT", "EMPTY", "JUNK", "BUG", "ZZZ")]
    source = FakeSource(
        symbols,
        {
            "AAAUSDT": rows([10, 14.6, 15, 11]),
            "DICTUSDT": {"code": -1121, "msg": "Invalid symbol."},
            "EMPTYUSDT": [],
            "JUNKUSDT": [["x"], [1, 2]],
            "ZZZUSDT": rows([0.98, 1.0, 0.99], lows=[0.9, 0.9, 0.9]),
        },
        errors={
            "BADUSDT": SourceUnavailable("HTTP 500", status_code=500),
            "BUGUSDT": RuntimeError("unexpected"),
        },
    )
    scanner = RetracementScanner(source)

    loading, pairs = await scanner.refresh(Granularity.MINUTE)

    assert loading is False
    assert [p.pair for p in pairs] == ["AAA-USDT", "ZZZ-USDT"]
    assert [r.symbol.symbol for r in scanner.snapshot.results] == ["AAAUSDT", "ZZZUSDT"]


@pytest.mark.asyncio
async def test_symbol_list_failure_fails_batch():
    source = FakeSource([], {}, symbol_error=SourceUnavailable("exchangeInfo down", 503))
    scanner = RetracementScanner(source)

    outcome = await scanner.refresh(Granularity.DAY)

    assert outcome == RefreshOutcome(loading=False, pairs=[])
    assert scanner.snapshot.state == BatchState.FAILED
    assert "exchangeInfo down" in scanner.snapshot.error
    assert source.calls == []


@pytest.mark.asyncio
async def test_symbol_list_timeout_fails_batch():
    source = FakeSource([_symbol("AAA")], {}, symbol_delay=1.0)
    scanner = RetracementScanner(source, ScanSettings(request_timeout=0.05))

    outcome = await scanner.refresh(Granularity.HOUR)

    assert outcome.loading is False
    assert scanner.snapshot.state == BatchState.FAILED
    assert "Timed out" in scanner.snapshot.error


@pytest.mark.asyncio
async def test_slow_symbol_times_out_and_is_excluded(rows):
    symbols = [_symbol("SLOW"), _symbol("FAST")]
    source = FakeSource(
        symbols,
        {"SLOWUSDT": rows([10, 14.6, 15]), "FASTUSDT": rows([10, 14.6, 15])},
        delays={"SLOWUSDT": 1.0},
    )
    scanner = RetracementScanner(source, ScanSettings(request_timeout=0.05))

    _, pairs = await scanner.refresh(Granularity.HOUR)

    assert [p.pair for p in pairs] == ["FAST-USDT"]


@pytest.mark.asyncio
async def test_empty_symbol_universe_is_ready_and_empty():
    scanner = RetracementScanner(FakeSource([], {}))

    outcome = await scanner.refresh(Granularity.HOUR)

    assert outcome == RefreshOutcome(loading=False, pairs=[])
    assert scanner.snapshot.state == BatchState.READY


@pytest.mark.asyncio
async def test_only_quote_asset_symbols_are_fetched(rows):
    symbols = [_symbol("AAA"), _symbol("AAA", "BTC")]
    source = FakeSource(symbols, {"AAAUSDT": rows([10, 14.6, 15])})
    scanner = RetracementScanner(source, ScanSettings(window_size=7))

    await scanner.refresh(Granularity.MINUTE)

    assert source.calls == [("AAAUSDT", Granularity.MINUTE, 7)]


@pytest.mark.asyncio
async def test_window_is_trimmed_to_most_recent_candles(rows):
    source = FakeSource(
        [_symbol("AAA")],
        {"AAAUSDT": rows([30, 1, 2, 3, 4, 5], lows=[15, 0.5, 1, 1.5, 2, 2.5])},
    )
    scanner = RetracementScanner(source, ScanSettings(window_size=3))

    await scanner.refresh(Granularity.HOUR)

    (result,) = scanner.snapshot.results
    assert [c.high for c in result.candles] == [3.0, 4.0, 5.0]
    assert result.reference_high == 5.0


@pytest.mark.asyncio
async def test_stale_batch_does_not_overwrite_newer_results(rows):
    source = FakeSource(
        [_symbol("AAA")],
        {
            "AAAUSDT": {
                Granularity.HOUR: rows([10, 14.6, 15]),
                Granularity.DAY: rows([10, 14.7, 15]),
            }
        },
        granularity_delays={Granularity.HOUR: 0.2},
    )
    scanner = RetracementScanner(source)

    stale = asyncio.create_task(scanner.refresh(Granularity.HOUR))
    await asyncio.sleep(0.02)
    fresh = await scanner.refresh(Granularity.DAY)
    stale_outcome = await stale

    assert [p.threshold_high for p in fresh.pairs] == [14.7]
    assert scanner.snapshot.generation == 2
    assert scanner.snapshot.granularity == Granularity.DAY
    # the stale caller sees the newer state, not its own results
    assert [p.threshold_high for p in stale_outcome.pairs] == [14.7]


@pytest.mark.asyncio
async def test_stale_batch_finishing_first_reports_loading(rows):
    source = FakeSource(
        [_symbol("AAA")],
        {"AAAUSDT": rows([10, 14.6, 15])},
        granularity_delays={Granularity.HOUR: 0.05, Granularity.DAY: 0.3},
    )
    scanner = RetracementScanner(source)

    first = asyncio.create_task(scanner.refresh(Granularity.HOUR))
    await asyncio.sleep(0.01)
    second = asyncio.create_task(scanner.refresh(Granularity.DAY))

    first_outcome = await first
    assert first_outcome == RefreshOutcome(loading=True, pairs=[])
    assert scanner.snapshot.state == BatchState.FETCHING
    assert scanner.snapshot.generation == 2

    second_outcome = await second
    assert second_outcome.loading is False
    assert scanner.snapshot.granularity == Granularity.DAY


@pytest.mark.asyncio
async def test_select_granularity_cancels_in_flight_refresh(rows):
    source = FakeSource(
        [_symbol("AAA")],
        {"AAAUSDT": rows([10, 14.6, 15])},
        granularity_delays={Granularity.HOUR: 1.0},
    )
    scanner = RetracementScanner(source)

    first = scanner.select_granularity("1h")
    await asyncio.sleep(0.01)
    second = scanner.select_granularity("1d")
    outcome = await second

    with pytest.raises(asyncio.CancelledError):
        await first
    assert outcome.loading is False
    assert scanner.snapshot.state == BatchState.READY
    assert scanner.snapshot.granularity == Granularity.DAY


@pytest.mark.asyncio
async def test_listeners_receive_fetching_then_ready(rows):
    source = FakeSource([_symbol("AAA")], {"AAAUSDT": rows([10, 14.6, 15])})
    scanner = RetracementScanner(source)
    seen_sync: list[ScanSnapshot] = []
    seen_async: list[BatchState] = []

    async def on_snapshot(snapshot: ScanSnapshot) -> None:
        seen_async.append(snapshot.state)

    def broken(_snapshot: ScanSnapshot) -> None:
        raise ValueError("listener bug")

    scanner.add_listener(seen_sync.append)
    scanner.add_listener(broken)
    scanner.add_listener(on_snapshot)

    await scanner.refresh(Granularity.HOUR)

    assert [s.state for s in seen_sync] == [BatchState.FETCHING, BatchState.READY]
    assert seen_sync[0].loading is True
    assert seen_async == [BatchState.FETCHING, BatchState.READY]

    scanner.remove_listener(seen_sync.append)
    await scanner.refresh(Granularity.HOUR)
    assert len(seen_sync) == 2


@pytest.mark.asyncio
async def test_concurrency_is_bounded(rows):
    symbols = [_symbol(f"S{i:02d}") for i in range(10)]
    source = FakeSource(
        symbols,
        {s.symbol: rows([10, 14.6, 15]) for s in symbols},
        delays={s.symbol: 0.01 for s in symbols},
    )
    scanner = RetracementScanner(source, ScanSettings(max_concurrency=3))

    _, pairs = await scanner.refresh(Granularity.HOUR)

    assert len(pairs) == 10
    assert source.max_in_flight <= 3


@pytest.mark.asyncio
async def test_refresh_is_idempotent_on_unchanged_input(rows):
    symbols = [_symbol("AAA"), _symbol("BBB")]
    source = FakeSource(
        symbols,
        {"AAAUSDT": rows([10, 14.6, 15, 11]), "BBBUSDT": rows([3, 2, 2.95, 1.5])},
    )
    scanner = RetracementScanner(source)

    await scanner.refresh(Granularity.HOUR)
    first = scanner.snapshot.results
    await scanner.refresh(Granularity.HOUR)
    second = scanner.snapshot.results

    assert first == second
    assert [r.model_dump() for r in first] == [r.model_dump() for r in second]


@pytest.mark.asyncio
async def test_invalid_granularity_raises():
    scanner = RetracementScanner(FakeSource([], {}))
    with pytest.raises(ValueError):
        await scanner.refresh("5m")
    assert scanner.snapshot.state == BatchState.IDLE


@pytest.mark.asyncio
async def test_context_manager_closes_source():
    source = FakeSource([], {})
    async with RetracementScanner(source) as scanner:
        assert scanner.snapshot.state == BatchState.IDLE
    assert source.closed


@pytest.mark.asyncio
async def test_unexpected_symbol_list_error_fails_batch():
    source = FakeSource([_symbol("AAA")], {}, symbol_error=ConnectionResetError("reset"))
    scanner = RetracementScanner(source)

    outcome = await scanner.refresh(Granularity.HOUR)

    assert outcome == RefreshOutcome(loading=False, pairs=[])
    assert scanner.snapshot.state == BatchState.FAILED
    assert scanner.snapshot.error == "reset"
    assert source.calls == []


@pytest.mark.asyncio
async def test_close_publishes_idle_for_cancelled_refresh():
    source = FakeSource([_symbol("AAA")], {}, symbol_delay=1.0)
    scanner = RetracementScanner(source)
    seen: list[ScanSnapshot] = []
    scanner.add_listener(seen.append)

    task = scanner.select_granularity(Granularity.HOUR)
    await asyncio.sleep(0.01)
    await scanner.close()

    assert task.cancelled()
    assert [s.state for s in seen] == [BatchState.FETCHING, BatchState.IDLE]
    assert scanner.snapshot.loading is False
    assert source.closed
