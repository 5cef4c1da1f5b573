"""Binance REST API raw response schemas.

These models represent the exact structure returned by Binance before
conversion to domain models. Field aliases are the Binance names; unknown
fields are ignored.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class BinanceSymbolInfo(BaseModel):
    """Raw Binance symbol information (from exchangeInfo)."""

    symbol: str = Field(..., min_length=1, description="Symbol")
    status: str = Field(..., description="Status")
    base_asset: str = Field(..., alias="baseAsset", min_length=1, description="Base asset")
    quote_asset: str = Field(..., alias="quoteAsset", min_length=1, description="Quote asset")

    model_config = {"populate_by_name": True}


class BinanceErrorPayload(BaseModel):
    """Error body Binance returns alongside 4xx statuses."""

    code: int = Field(..., description="Binance error code")
    msg: str = Field(..., description="Error message")


__all__ = [
    "BinanceErrorPayload",
    "BinanceSymbolInfo",
]
