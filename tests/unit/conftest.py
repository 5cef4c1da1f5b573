"""Shared fixtures for unit tests."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

import pytest

from retrace.models import Candle, CandleWindow

BASE_TIME_MS = 1_700_000_000_000
HOUR_MS = 3_600_000


def make_row(index: int, high: float, low: float, volume: float = 100.0) -> list[Any]:
    """Binance-style kline row with text prices and a mid-range open/close."""
    mid = (high + low) / 2
    open_time = BASE_TIME_MS + index * HOUR_MS
    return [
        open_time,
        str(mid),
        str(high),
        str(low),
        str(mid),
        str(volume),
        open_time + HOUR_MS - 1,
        "0",
        10,
        "0",
        "0",
        "0",
    ]


def make_window(highs: Sequence[float], lows: Sequence[float] | None = None) -> CandleWindow:
    """Chronological window; lows default to ``high - 1``."""
    if lows is None:
        lows = [h - 1 for h in highs]
    candles = []
    for i, (high, low) in enumerate(zip(highs, lows, strict=True)):
        mid = (high + low) / 2
        open_time = BASE_TIME_MS + i * HOUR_MS
        candles.append(
            Candle(
                open_time=open_time,
                open=mid,
                high=high,
                low=low,
                close=mid,
                volume=100.0,
                close_time=open_time + HOUR_MS - 1,
            )
        )
    return tuple(candles)


@pytest.fixture
def row_factory() -> Callable[..., list[Any]]:
    return make_row


@pytest.fixture
def window_factory() -> Callable[..., CandleWindow]:
    return make_window
