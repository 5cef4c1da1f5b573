"""Shape raw candle rows into typed candles.

A raw row is a positional sequence with at least seven fields:
``[open_time, open, high, low, close, volume, close_time, ...]``. Prices may
arrive as text (Binance sends decimal strings) or as numbers. Extra trailing
fields are ignored.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from pydantic import ValidationError

from ..core.exceptions import MalformedCandle
from ..models import Candle, CandleWindow

logger = logging.getLogger(__name__)

ROW_FIELDS = ("open_time", "open", "high", "low", "close", "volume", "close_time")


def _is_row(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _parse_timestamp(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise MalformedCandle(f"{field} must be an integer timestamp, got {value!r}")
    try:
        if isinstance(value, float):
            if not value.is_integer():
                raise ValueError(value)
            return int(value)
        return int(value)
    except (TypeError, ValueError) as e:
        raise MalformedCandle(f"{field} must be an integer timestamp, got {value!r}") from e


def _parse_number(value: Any, field: str) -> float:
    if isinstance(value, bool):
        raise MalformedCandle(f"{field} must be numeric, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise MalformedCandle(f"{field} must be numeric, got {value!r}") from e


def normalize_candle(row: Sequence[Any]) -> Candle:
    """Convert one raw row into a Candle.

    Raises:
        MalformedCandle: If a required field is missing, unparseable, or the
            resulting OHLC values are inconsistent.
    """
    if not _is_row(row):
        raise MalformedCandle(f"Candle row must be a sequence, got {type(row).__name__}", row=row)
    if len(row) < len(ROW_FIELDS):
        raise MalformedCandle(
            f"Candle row has {len(row)} fields, expected at least {len(ROW_FIELDS)}", row=row
        )

    try:
        values = {
            "open_time": _parse_timestamp(row[0], "open_time"),
            "open": _parse_number(row[1], "open"),
            "high": _parse_number(row[2], "high"),
            "low": _parse_number(row[3], "low"),
            "close": _parse_number(row[4], "close"),
            "volume": _parse_number(row[5], "volume"),
            "close_time": _parse_timestamp(row[6], "close_time"),
        }
    except MalformedCandle as e:
        e.row = row
        raise

    try:
        return Candle(**values)
    except ValidationError as e:
        raise MalformedCandle(f"Invalid candle values: {e.errors()[0]['msg']}", row=row) from e


def normalize_window(rows: Any, *, symbol: str | None = None) -> CandleWindow:
    """Normalize a symbol's raw rows into a chronologically ascending window.

    Malformed rows are dropped individually. The caller decides what an
    empty result means.

    Raises:
        MalformedCandle: If ``rows`` is not a list of rows at all (for
            example an error payload returned in place of candles).
    """
    if not _is_row(rows):
        raise MalformedCandle(
            f"Expected a list of candle rows for {symbol or 'symbol'}, got {type(rows).__name__}",
            row=rows,
        )

    candles: list[Candle] = []
    for index, row in enumerate(rows):
        try:
            candles.append(normalize_candle(row))
        except MalformedCandle as e:
            logger.warning(f"Dropping malformed candle {index} for {symbol}: {e}")

    candles.sort(key=lambda candle: candle.open_time)
    return tuple(candles)
