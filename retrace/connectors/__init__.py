"""Exchange connectors implementing the CandleSource interface."""

from .binance import BinanceRESTConnector

__all__ = ["BinanceRESTConnector"]
