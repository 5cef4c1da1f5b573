"""Retracement filter: admissible candles and the threshold candle.

Architecture:
    Two pure steps over a window and its reference candle:

    1. Restriction drops candles whose low fell below a floor derived from
       the reference low (``low_floor_ratio``, half by default). Such moves
       are too extreme to count as a pullback.
    2. The threshold search walks the restricted window oldest first and
       returns the first candle whose high reaches ``high_ratio`` (97% by
       default) of the reference high.

    Both steps preserve chronological order; the search is order-sensitive
    and must not be replaced by a max/min lookup.
"""

from __future__ import annotations

from ..core.settings import DEFAULT_HIGH_RATIO, DEFAULT_LOW_FLOOR_RATIO, ScanSettings
from ..models import Candle, CandleWindow


def restrict_window(
    window: CandleWindow,
    reference: Candle,
    *,
    low_floor_ratio: float = DEFAULT_LOW_FLOOR_RATIO,
) -> CandleWindow:
    """Keep candles whose low is at least ``reference.low * low_floor_ratio``."""
    floor = reference.low * low_floor_ratio
    return tuple(candle for candle in window if candle.low >= floor)


def find_threshold_candle(
    restricted: CandleWindow,
    reference: Candle,
    *,
    high_ratio: float = DEFAULT_HIGH_RATIO,
) -> Candle | None:
    """Return the earliest candle with ``high >= reference.high * high_ratio``."""
    threshold = reference.high * high_ratio
    for candle in restricted:
        if candle.high >= threshold:
            return candle
    return None


def retrace(
    window: CandleWindow,
    reference: Candle,
    settings: ScanSettings | None = None,
) -> Candle | None:
    """Run restriction then threshold search with the given settings."""
    settings = settings or ScanSettings()
    restricted = restrict_window(window, reference, low_floor_ratio=settings.low_floor_ratio)
    return find_threshold_candle(restricted, reference, high_ratio=settings.high_ratio)
