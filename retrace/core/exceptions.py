"""Custom exception hierarchy."""

from __future__ import annotations


class ScanError(Exception):
    """Base exception for all library errors."""

    pass


class MalformedCandle(ScanError):
    """A raw candle record is missing fields or cannot be parsed.

    Recovered locally: the offending record is dropped from its window.
    """

    def __init__(self, message: str, row: object | None = None) -> None:
        super().__init__(message)
        self.row = row


class EmptyWindow(ScanError):
    """A symbol has no usable candles.

    Recovered by excluding the symbol from the result set.
    """

    def __init__(self, message: str, symbol: str | None = None) -> None:
        super().__init__(message)
        self.symbol = symbol


class SourceUnavailable(ScanError):
    """The symbol list or a candle retrieval failed outright.

    Covers transport errors, HTTP error statuses and timeouts. For a single
    symbol it only excludes that symbol; for the symbol list it fails the
    whole batch.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code


class ConfigurationError(ScanError):
    """Scanner settings are invalid."""

    pass
