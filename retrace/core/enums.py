"""Core enumerations shared by the scanner, connectors and display layer.

Architecture:
    String enums keep the values directly usable in exchange queries and
    CLI choices. Exchange-specific vocabularies are mapped in the connector
    config modules, never here.

Key Types:
    - Granularity: Candle time span selected by the display consumer
    - BatchState: Lifecycle of one scanner refresh cycle
"""

from enum import Enum
from typing import Optional

_SECONDS_MAP = {
    "1m": 60,
    "1h": 3600,
    "1d": 86400,
}


class Granularity(str, Enum):
    """Time span represented by each candle of a window."""

    MINUTE = "1m"
    HOUR = "1h"
    DAY = "1d"

    def __str__(self) -> str:
        return self.value

    @property
    def seconds(self) -> int:
        """Number of seconds in one candle."""
        return _SECONDS_MAP[self.value]

    @property
    def label(self) -> str:
        """Human readable name used by the display layer."""
        return {"1m": "1 minute", "1h": "1 hour", "1d": "1 day"}[self.value]

    @classmethod
    def from_str(cls, value: str) -> Optional["Granularity"]:
        """Get granularity from its token or member name. Returns None if no match."""
        try:
            return cls(value)
        except ValueError:
            pass
        try:
            return cls[value.upper()]
        except KeyError:
            return None


class BatchState(str, Enum):
    """State of the scanner's current refresh cycle."""

    IDLE = "idle"
    FETCHING = "fetching"
    READY = "ready"
    FAILED = "failed"

    def __str__(self) -> str:
        return self.value
