"""Terminal display for the retracement scan.

Usage:
    retrace-scan --granularity 1h
    python -m retrace --granularity 1d --log-level DEBUG
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from collections.abc import Sequence

from .clients import RetracementScanner
from .connectors import BinanceRESTConnector
from .core import BatchState, ConfigurationError, Granularity, ScanSettings
from .models import TradingPairResult

NOT_AVAILABLE = "N/A"


def _format_price(value: float | None) -> str:
    if value is None:
        return NOT_AVAILABLE
    return format(value, ".10g")


def render_table(pairs: Sequence[TradingPairResult]) -> str:
    """Render pairs as the Symbol / Reference High / 97% High table."""
    header = f"{'Symbol':16} | {'Reference High':>16} | {'97% High':>16}"
    lines = [header, "-" * len(header)]
    for pair in pairs:
        lines.append(
            f"{pair.pair:16} | {_format_price(pair.reference_high):>16} | "
            f"{_format_price(pair.threshold_high):>16}"
        )
    lines.append("")
    if pairs:
        lines.append(f"Displaying results: {len(pairs)} pairs")
    else:
        lines.append("No matching pairs found.")
    return "\n".join(lines)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Scan Binance USDT pairs for 97% retracements")
    p.add_argument(
        "--granularity",
        "-g",
        default=Granularity.HOUR.value,
        choices=[g.value for g in Granularity],
        help="Candle granularity (default: 1h)",
    )
    p.add_argument("--limit", type=int, default=ScanSettings().window_size, help="Candles per pair")
    p.add_argument("--concurrency", type=int, default=ScanSettings().max_concurrency)
    p.add_argument("--timeout", type=float, default=ScanSettings().request_timeout)
    p.add_argument("--all", action="store_true", help="Show excluded pairs too")
    p.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return p.parse_args(argv)


async def run(args: argparse.Namespace) -> int:
    try:
        settings = ScanSettings(
            window_size=args.limit,
            max_concurrency=args.concurrency,
            request_timeout=args.timeout,
        )
    except ConfigurationError as e:
        print(f"Invalid settings: {e}")
        return 2
    async with RetracementScanner(BinanceRESTConnector(), settings) as scanner:
        print("Loading...")
        await scanner.refresh(args.granularity)
        snapshot = scanner.snapshot

    if snapshot.state == BatchState.FAILED:
        print(f"Error fetching data: {snapshot.error}")
        return 1

    pairs = list(snapshot.results) if args.all else snapshot.displayed
    print(render_table(pairs))
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return asyncio.run(run(args))


if __name__ == "__main__":
    raise SystemExit(main())
