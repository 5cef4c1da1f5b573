"""Binance REST connector."""

from .provider import BinanceRESTConnector

__all__ = ["BinanceRESTConnector"]
