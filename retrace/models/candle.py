"""Candle (OHLCV) data model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Candle(BaseModel):
    """One closed or in-progress price candle.

    Timestamps are exchange milliseconds. Prices and volume are floats; the
    OHLC ordering is checked on construction so that corrupt exchange rows
    are rejected instead of skewing the reference high.
    """

    open_time: int = Field(..., ge=0)
    open: float = Field(..., gt=0, allow_inf_nan=False)
    high: float = Field(..., gt=0, allow_inf_nan=False)
    low: float = Field(..., gt=0, allow_inf_nan=False)
    close: float = Field(..., gt=0, allow_inf_nan=False)
    volume: float = Field(..., ge=0, allow_inf_nan=False)
    close_time: int = Field(..., ge=0)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_ohlc(self) -> Candle:
        """Validate high >= open, close, low and low <= open, close."""
        if self.high < self.low:
            raise ValueError("high must be >= low")
        if self.high < max(self.open, self.close):
            raise ValueError("high must be >= open and close")
        if self.low > min(self.open, self.close):
            raise ValueError("low must be <= open and close")
        if self.close_time < self.open_time:
            raise ValueError("close_time must be >= open_time")
        return self


# A window is an immutable, chronologically ascending run of candles.
CandleWindow = tuple[Candle, ...]
