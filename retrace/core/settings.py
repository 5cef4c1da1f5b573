"""Scanner configuration.

The retracement thresholds are kept as named defaults rather than literals in
the analysis code. Their values (97% of the reference high, half of the
reference low) are part of the scanner's observable behavior.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any

from .exceptions import ConfigurationError

DEFAULT_QUOTE_ASSET = "USDT"
DEFAULT_WINDOW_SIZE = 10
DEFAULT_HIGH_RATIO = 0.97
DEFAULT_LOW_FLOOR_RATIO = 0.5
DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_MAX_CONCURRENCY = 20


@dataclass(frozen=True)
class ScanSettings:
    """Immutable settings for one scanner instance.

    Attributes:
        quote_asset: Only symbols quoted in this asset are scanned
        window_size: Number of most recent candles requested per symbol
        high_ratio: Fraction of the reference high a candle must reach
        low_floor_ratio: Fraction of the reference low a candle must stay above
        request_timeout: Seconds allowed for each single retrieval
        max_concurrency: Upper bound on in-flight candle retrievals
    """

    quote_asset: str = DEFAULT_QUOTE_ASSET
    window_size: int = DEFAULT_WINDOW_SIZE
    high_ratio: float = DEFAULT_HIGH_RATIO
    low_floor_ratio: float = DEFAULT_LOW_FLOOR_RATIO
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY

    def __post_init__(self) -> None:
        if not self.quote_asset or not self.quote_asset.strip():
            raise ConfigurationError("quote_asset must be a non-empty string")
        object.__setattr__(self, "quote_asset", self.quote_asset.strip().upper())
        if self.window_size <= 0:
            raise ConfigurationError("window_size must be a positive integer")
        if not 0 < self.high_ratio <= 1:
            raise ConfigurationError("high_ratio must be in (0, 1]")
        if not 0 < self.low_floor_ratio <= 1:
            raise ConfigurationError("low_floor_ratio must be in (0, 1]")
        if self.request_timeout <= 0:
            raise ConfigurationError("request_timeout must be positive")
        if self.max_concurrency <= 0:
            raise ConfigurationError("max_concurrency must be a positive integer")

    def replace(self, **changes: Any) -> ScanSettings:
        """Return a copy with the given fields changed (validated again)."""
        return dataclasses.replace(self, **changes)
