"""Pair classification and the inclusion rule."""

from __future__ import annotations

from ..core.settings import ScanSettings
from ..models import Candle, CandleWindow, Symbol, TradingPairResult
from .reference import select_reference
from .retracement import retrace


def classify_pair(
    symbol: Symbol,
    window: CandleWindow,
    reference: Candle,
    threshold: Candle | None,
) -> TradingPairResult:
    """Assemble the result record for one symbol."""
    return TradingPairResult(
        symbol=symbol,
        candles=window,
        reference_high=reference.high,
        threshold_high=threshold.high if threshold is not None else None,
    )


def is_included(result: TradingPairResult) -> bool:
    """Inclusion rule: drop the pair only if the threshold high equals the reference high."""
    return result.is_included


def analyze_window(
    symbol: Symbol,
    window: CandleWindow,
    settings: ScanSettings | None = None,
) -> TradingPairResult:
    """Select the reference, run the retracement filter and classify.

    Raises:
        EmptyWindow: If ``window`` has no candles.
    """
    reference = select_reference(window)
    threshold = retrace(window, reference, settings)
    return classify_pair(symbol, window, reference, threshold)
