"""Shared Binance connector constants.

This module centralizes the REST base URL and the interval mapping so the
endpoint definitions and the connector can stay small and focused.
"""

from __future__ import annotations

from retrace.core import Granularity

# Spot REST base URL
BASE_URL = "https://api.binance.com"

API_PATH_PREFIX = "/api/v3"

# Binance caps a single klines request at 1000 rows
MAX_KLINES_LIMIT = 1000

# Only symbols in this state are considered tradable
TRADING_STATUS = "TRADING"

# Binance interval mapping
INTERVAL_MAP = {
    Granularity.MINUTE: "1m",
    Granularity.HOUR: "1h",
    Granularity.DAY: "1d",
}
