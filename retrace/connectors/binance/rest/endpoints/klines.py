"""Binance klines (candles) endpoint definition and adapter."""

from __future__ import annotations

from typing import Any

from retrace.connectors.binance.config import API_PATH_PREFIX, INTERVAL_MAP, MAX_KLINES_LIMIT
from retrace.connectors.binance.rest.schemas import BinanceErrorPayload
from retrace.core import MalformedCandle, SourceUnavailable
from retrace.runtime.rest import ResponseAdapter, RestEndpointSpec


def build_path(_params: dict[str, Any]) -> str:
    """Build the klines path."""
    return f"{API_PATH_PREFIX}/klines"


def build_query(params: dict[str, Any]) -> dict[str, Any]:
    """Build query parameters for klines endpoint."""
    q: dict[str, Any] = {
        "symbol": params["symbol"].upper(),
        "interval": INTERVAL_MAP[params["granularity"]],
    }
    if params.get("limit"):
        q["limit"] = min(int(params["limit"]), MAX_KLINES_LIMIT)
    return q


# Endpoint specification
SPEC = RestEndpointSpec(
    id="klines",
    method="GET",
    build_path=build_path,
    build_query=build_query,
)


class Adapter(ResponseAdapter):
    """Adapter returning the raw kline rows.

    Rows stay positional; shaping them into candles is the analysis layer's
    job so that a single bad row only drops that row.
    """

    def parse(self, response: Any, params: dict[str, Any]) -> list[list[Any]]:
        if isinstance(response, dict) and "code" in response and "msg" in response:
            error = BinanceErrorPayload.model_validate(response)
            raise SourceUnavailable(f"Binance error {error.code} for {params['symbol']}: {error.msg}")
        if not isinstance(response, list):
            raise MalformedCandle(
                f"Expected a list of klines for {params['symbol']}, got {type(response).__name__}",
                row=response,
            )
        return list(response)
