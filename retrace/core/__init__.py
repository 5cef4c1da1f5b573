"""Core components."""

from .base import CandleSource
from .enums import BatchState, Granularity
from .exceptions import (
    ConfigurationError,
    EmptyWindow,
    MalformedCandle,
    ScanError,
    SourceUnavailable,
)
from .settings import (
    DEFAULT_HIGH_RATIO,
    DEFAULT_LOW_FLOOR_RATIO,
    DEFAULT_QUOTE_ASSET,
    DEFAULT_WINDOW_SIZE,
    ScanSettings,
)

__all__ = [
    "CandleSource",
    "BatchState",
    "Granularity",
    "ScanError",
    "MalformedCandle",
    "EmptyWindow",
    "SourceUnavailable",
    "ConfigurationError",
    "ScanSettings",
    "DEFAULT_HIGH_RATIO",
    "DEFAULT_LOW_FLOOR_RATIO",
    "DEFAULT_QUOTE_ASSET",
    "DEFAULT_WINDOW_SIZE",
]
