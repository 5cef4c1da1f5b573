"""Per-symbol retracement result model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .candle import Candle
from .symbol import Symbol


class TradingPairResult(BaseModel):
    """Outcome of the retracement analysis for one symbol.

    Attributes:
        symbol: The analysed trading symbol
        candles: Full candle window the analysis ran on
        reference_high: High of the reference (maximum-high) candle
        threshold_high: High of the earliest candle reaching the threshold
            band, or None when no admissible candle reached it
    """

    symbol: Symbol
    candles: tuple[Candle, ...] = Field(..., min_length=1)
    reference_high: float
    threshold_high: float | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def pair(self) -> str:
        """Display identifier, e.g. ``BTC-USDT``."""
        return self.symbol.pair

    @property
    def is_included(self) -> bool:
        """Whether the pair belongs in the displayed set.

        A pair is dropped only when the first candle crossing the band has
        exactly the reference high, i.e. price never pulled back from its
        peak. A missing threshold high always differs from the reference.
        """
        return self.threshold_high != self.reference_high
