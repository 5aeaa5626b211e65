#!/usr/bin/env python3
"""Live earthquake watcher for the P2PQuake feed.

This script uses pyquake to:
1) print the most recent earthquake notifications (``/history``),
2) optionally run a filtered JMA archive query,
3) stream live notifications until Ctrl+C or ``--duration`` elapses.

Use this to check connectivity and to eyeball the normalized records.
"""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import logging
import signal
import sys
from datetime import date
from pathlib import Path

# Allow running from repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyquake import (  # noqa: E402
    ALL_PREFECTURES,
    FeedState,
    IngestionService,
    QuakeConfig,
    QuakeError,
    SeismicEvent,
)

_LOG = logging.getLogger("watch_quakes")


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Stream P2PQuake earthquake notifications.")
    parser.add_argument(
        "--recent",
        type=int,
        default=10,
        help="Number of recent events to print first (0 = skip).",
    )
    parser.add_argument(
        "--min-magnitude",
        type=float,
        default=0.0,
        help="Run a filtered query with this minimum magnitude.",
    )
    parser.add_argument(
        "--prefecture",
        default=ALL_PREFECTURES,
        help="Prefecture filter for the filtered query.",
    )
    parser.add_argument("--since", type=date.fromisoformat, default=None, help="Filter start date (YYYY-MM-DD).")
    parser.add_argument("--until", type=date.fromisoformat, default=None, help="Filter end date (YYYY-MM-DD).")
    parser.add_argument(
        "--duration",
        type=int,
        default=0,
        help="Maximum runtime in seconds (0 = run until Ctrl+C).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logs.",
    )
    return parser.parse_args()


def _format(event: SeismicEvent) -> str:
    line = (
        f"{event.formatted_time}  M{event.formatted_magnitude:>4}  {event.formatted_depth:>7}  "
        f"max {event.max_intensity_label:<12} {event.epicenter_name}"
    )
    if event.affected_areas:
        shown = ", ".join(event.affected_areas[:3])
        more = len(event.affected_areas) - 3
        line += f"\n    {shown}{f' (+{more} more)' if more > 0 else ''}"
    return line


def _wants_filtered(args: argparse.Namespace) -> bool:
    return (
        args.min_magnitude > 0
        or args.prefecture != ALL_PREFECTURES
        or args.since is not None
        or args.until is not None
    )


async def _run(args: argparse.Namespace) -> int:
    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        with contextlib.suppress(NotImplementedError):
            loop.add_signal_handler(sig, stop.set)

    def on_state(state: FeedState) -> None:
        _LOG.info("feed state: %s", state)

    config = QuakeConfig.from_env()
    async with IngestionService(config, on_state_change=on_state) as service:
        try:
            if args.recent > 0:
                print(f"--- {args.recent} most recent ---")
                for event in await service.fetch_recent(args.recent):
                    print(_format(event))
            if _wants_filtered(args):
                print("--- filtered ---")
                results = await service.fetch_filtered(args.min_magnitude, args.prefecture, args.since, args.until)
                for event in results:
                    print(_format(event))
        except QuakeError as exc:
            print(f"query failed: {exc}", file=sys.stderr)

        print("--- live ---")
        service.subscribe(lambda event: print(_format(event), flush=True))
        await service.start()
        timeout = args.duration if args.duration > 0 else None
        with contextlib.suppress(TimeoutError):
            await asyncio.wait_for(stop.wait(), timeout)
    return 0


def main() -> int:
    args = _parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return asyncio.run(_run(args))


if __name__ == "__main__":
    raise SystemExit(main())
