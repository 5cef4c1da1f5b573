#!/usr/bin/env python3
"""Drive the scanner the way an interactive display would.

Each granularity selection starts a background refresh; a listener prints
every committed snapshot. Selecting again while a scan is in flight cancels
the older one, whose results are never shown.
"""

from __future__ import annotations

import argparse
import asyncio
import logging

from retrace import BinanceRESTConnector, Granularity, RetracementScanner, ScanSnapshot
from retrace.cli import render_table


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Scan USDT pairs for several granularities")
    p.add_argument("granularities", nargs="*", default=["1h", "1d"])
    p.add_argument("--pause", type=float, default=0.5, help="Seconds between selections")
    return p.parse_args()


def on_snapshot(snapshot: ScanSnapshot) -> None:
    print("=" * 56)
    print(f"Generation : {snapshot.generation}")
    print(f"Granularity: {snapshot.granularity}")
    print(f"State      : {snapshot.state}")
    if snapshot.loading:
        print("Loading...")
    elif snapshot.error:
        print(f"Error fetching data: {snapshot.error}")
    else:
        print(render_table(snapshot.displayed))


async def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.INFO)

    async with RetracementScanner(BinanceRESTConnector()) as scanner:
        scanner.add_listener(on_snapshot)
        task = None
        for token in args.granularities:
            task = scanner.select_granularity(Granularity(token))
            await asyncio.sleep(args.pause)
        if task is not None:
            await task


if __name__ == "__main__":
    asyncio.run(main())
