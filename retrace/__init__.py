"""Retrace - USDT pair retracement scanner for Binance spot markets."""

from .analysis import (
    analyze_window,
    classify_pair,
    find_threshold_candle,
    is_included,
    normalize_candle,
    normalize_window,
    restrict_window,
    select_reference,
)
from .clients import FetchOutcome, RetracementScanner
from .connectors import BinanceRESTConnector
from .core import (
    BatchState,
    CandleSource,
    ConfigurationError,
    EmptyWindow,
    Granularity,
    MalformedCandle,
    ScanError,
    ScanSettings,
    SourceUnavailable,
)
from .models import (
    Candle,
    CandleWindow,
    RefreshOutcome,
    ScanSnapshot,
    Symbol,
    TradingPairResult,
)

__version__ = "0.1.0"

__all__ = [
    # Core enums and settings
    "BatchState",
    "Granularity",
    "ScanSettings",
    # Sources
    "CandleSource",
    "BinanceRESTConnector",
    # Models
    "Candle",
    "CandleWindow",
    "RefreshOutcome",
    "ScanSnapshot",
    "Symbol",
    "TradingPairResult",
    # Analysis
    "analyze_window",
    "classify_pair",
    "find_threshold_candle",
    "is_included",
    "normalize_candle",
    "normalize_window",
    "restrict_window",
    "select_reference",
    # Clients
    "FetchOutcome",
    "RetracementScanner",
    # Exceptions
    "ScanError",
    "MalformedCandle",
    "EmptyWindow",
    "SourceUnavailable",
    "ConfigurationError",
]
