"""Data models for the retracement scanner.

Architecture:
    Candle, Symbol and TradingPairResult are frozen Pydantic v2 models so that
    exchange input is validated once at the boundary and never mutated
    afterwards. Scanner snapshots are frozen dataclasses replaced wholesale
    on every refresh.

Model Categories:
    - Market Data: Candle, CandleWindow
    - Metadata: Symbol
    - Analysis: TradingPairResult
    - Scanner state: ScanSnapshot, RefreshOutcome
"""

from .candle import Candle, CandleWindow
from .result import TradingPairResult
from .snapshot import RefreshOutcome, ScanSnapshot
from .symbol import Symbol

__all__ = [
    "Candle",
    "CandleWindow",
    "RefreshOutcome",
    "ScanSnapshot",
    "Symbol",
    "TradingPairResult",
]
