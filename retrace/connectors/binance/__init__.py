"""Binance connector implementation."""

from .config import BASE_URL, INTERVAL_MAP
from .rest.provider import BinanceRESTConnector

__all__ = [
    "BASE_URL",
    "INTERVAL_MAP",
    "BinanceRESTConnector",
]
