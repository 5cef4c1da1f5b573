"""Per-pair candle analysis: normalize, select reference, filter, classify."""

from .classifier import analyze_window, classify_pair, is_included
from .normalizer import normalize_candle, normalize_window
from .reference import select_reference
from .retracement import find_threshold_candle, restrict_window, retrace

__all__ = [
    "analyze_window",
    "classify_pair",
    "find_threshold_candle",
    "is_included",
    "normalize_candle",
    "normalize_window",
    "restrict_window",
    "retrace",
    "select_reference",
]
