"""Binance REST endpoint registry."""

from . import exchange_info, klines

ENDPOINTS = {
    exchange_info.SPEC.id: (exchange_info.SPEC, exchange_info.Adapter),
    klines.SPEC.id: (klines.SPEC, klines.Adapter),
}

__all__ = ["ENDPOINTS", "exchange_info", "klines"]
