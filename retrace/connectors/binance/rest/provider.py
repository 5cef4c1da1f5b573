"""Binance REST connector.

Implements the CandleSource interface on top of the shared REST runtime:
every call resolves an endpoint spec and its adapter from the endpoint
registry and runs it through a single RestRunner.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from retrace.connectors.binance.config import BASE_URL
from retrace.connectors.binance.rest.endpoints import ENDPOINTS
from retrace.core import CandleSource, Granularity
from retrace.models import Symbol
from retrace.runtime.rest import HTTPClient, RestRunner

logger = logging.getLogger(__name__)


class BinanceRESTConnector(CandleSource):
    """REST connector for Binance spot symbols and klines."""

    def __init__(
        self,
        *,
        base_url: str = BASE_URL,
        timeout: float = 30.0,
        http_client: HTTPClient | None = None,
    ) -> None:
        """Initialize the connector.

        Args:
            base_url: REST base URL, overridable for testnets and mocks
            timeout: Total timeout per HTTP request in seconds
            http_client: Preconfigured client, mainly for tests
        """
        super().__init__(name="binance")
        self._http = http_client or HTTPClient(base_url=base_url, timeout=timeout)
        self._rest = RestRunner(self._http)
        self._symbols_cache: dict[str, list[Symbol]] = {}

    async def fetch(self, endpoint_id: str, params: dict[str, Any]) -> Any:
        """Fetch data from a Binance REST endpoint.

        Args:
            endpoint_id: Endpoint identifier ("exchange_info" or "klines")
            params: Request parameters

        Returns:
            Parsed response
        """
        try:
            spec, adapter_cls = ENDPOINTS[endpoint_id]
        except KeyError:
            raise ValueError(f"Unknown Binance endpoint: {endpoint_id}") from None
        return await self._rest.run(spec=spec, adapter=adapter_cls(), params=params)

    async def get_symbols(self, quote_asset: str, use_cache: bool = False) -> list[Symbol]:
        """Get tradable symbols quoted in ``quote_asset``, in exchange order."""
        key = quote_asset.upper()
        if use_cache and key in self._symbols_cache:
            return list(self._symbols_cache[key])

        symbols: list[Symbol] = await self.fetch("exchange_info", {"quote_asset": key})
        logger.debug(f"Loaded {len(symbols)} {key} symbols from exchangeInfo")
        self._symbols_cache[key] = symbols
        return list(symbols)

    async def fetch_candles(
        self,
        symbol: str,
        granularity: Granularity,
        limit: int,
    ) -> list[Sequence[Any]]:
        """Fetch the most recent raw kline rows for one symbol."""
        self.validate_symbol(symbol)
        return await self.fetch(
            "klines",
            {"symbol": symbol, "granularity": granularity, "limit": limit},
        )

    async def close(self) -> None:
        """Close underlying resources."""
        await self._http.close()
