"""Binance exchange info endpoint definition and adapter."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from retrace.connectors.binance.config import API_PATH_PREFIX, TRADING_STATUS
from retrace.connectors.binance.rest.schemas import BinanceSymbolInfo
from retrace.core import SourceUnavailable
from retrace.models import Symbol
from retrace.runtime.rest import ResponseAdapter, RestEndpointSpec

logger = logging.getLogger(__name__)


def build_path(_params: dict[str, Any]) -> str:
    """Build the exchangeInfo path."""
    return f"{API_PATH_PREFIX}/exchangeInfo"


# Endpoint specification
SPEC = RestEndpointSpec(
    id="exchange_info",
    method="GET",
    build_path=build_path,
    build_query=lambda _: {},
)


class Adapter(ResponseAdapter):
    """Adapter for parsing Binance exchangeInfo response into Symbol list."""

    def parse(self, response: Any, params: dict[str, Any]) -> list[Symbol]:
        """Parse Binance exchangeInfo response.

        Args:
            response: Raw response from Binance API
            params: Request parameters with optional quote_asset filter

        Returns:
            Tradable symbols in exchange order

        Raises:
            SourceUnavailable: If the payload has no symbol list at all
        """
        if not isinstance(response, dict) or not isinstance(response.get("symbols"), list):
            raise SourceUnavailable("Malformed exchangeInfo payload: missing symbols list")

        quote_asset_filter = params.get("quote_asset")
        out: list[Symbol] = []
        for entry in response["symbols"]:
            try:
                info = BinanceSymbolInfo.model_validate(entry)
            except ValidationError as e:
                logger.warning(f"Skipping malformed exchangeInfo entry: {e.errors()[0]['msg']}")
                continue
            if info.status != TRADING_STATUS:
                continue
            if quote_asset_filter and info.quote_asset != quote_asset_filter:
                continue
            out.append(
                Symbol(
                    symbol=info.symbol,
                    base_asset=info.base_asset,
                    quote_asset=info.quote_asset,
                    status=info.status,
                )
            )
        return out
