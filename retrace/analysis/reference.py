"""Reference candle selection."""

from __future__ import annotations

from ..core.exceptions import EmptyWindow
from ..models import Candle, CandleWindow


def select_reference(window: CandleWindow) -> Candle:
    """Return the candle with the highest high.

    The window is scanned in ascending time order and a later candle only
    replaces the current maximum when its high is strictly greater, so the
    earliest of several equal highs wins.

    Raises:
        EmptyWindow: If the window has no candles.
    """
    if not window:
        raise EmptyWindow("Cannot select a reference candle from an empty window")

    reference = window[0]
    for candle in window[1:]:
        if candle.high > reference.high:
            reference = candle
    return reference
