"""Base candle source abstract class.

Architecture:
    The scanner never talks HTTP itself. It consumes any object implementing
    this interface: one call for the symbol universe and one call per symbol
    for a short window of raw candle rows. Raw rows are positional sequences
    (open-time, open, high, low, close, volume, close-time, ...) and are shaped
    into candles by the analysis layer, not by the source.

See Also:
    - BinanceRESTConnector: Production implementation
    - RetracementScanner: The consumer
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..models import Symbol
    from .enums import Granularity


class CandleSource(ABC):
    """Abstract base class for symbol and candle sources."""

    def __init__(self, name: str) -> None:
        self.name = name

    @abstractmethod
    async def get_symbols(self, quote_asset: str) -> list[Symbol]:
        """Fetch all tradable symbols quoted in ``quote_asset``."""
        pass

    @abstractmethod
    async def fetch_candles(
        self,
        symbol: str,
        granularity: Granularity,
        limit: int,
    ) -> list[Sequence[Any]]:
        """Fetch up to ``limit`` most recent raw candle rows for a symbol."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close source connections and cleanup resources."""
        pass

    def validate_symbol(self, symbol: str) -> None:
        """Validate symbol format. Override if needed."""
        if not symbol or not isinstance(symbol, str):
            raise ValueError("Symbol must be a non-empty string")

    async def __aenter__(self) -> CandleSource:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
