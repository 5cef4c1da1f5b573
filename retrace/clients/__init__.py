"""High-level clients built on candle sources."""

from .scanner import FetchOutcome, RetracementScanner

__all__ = ["FetchOutcome", "RetracementScanner"]
