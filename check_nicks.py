#!/usr/bin/env python3
"""
CLI tool to check Minecraft nick availability using the Mojang API.

Usage:
    python check_nicks.py Notch jeb_ coolnick123
    python check_nicks.py --file nicks.txt
    python check_nicks.py --file - --json < nicks.txt
"""

import argparse
import asyncio
import json
import os
import sys

# Allow running from a checkout without installing
sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), "src"))

from minecraft_names_mcp.batch import NickBatch, RecordStatus, ResultRecord, parse_nick_list
from minecraft_names_mcp.config import get_pacing_delay, get_relay_names, get_request_timeout
from minecraft_names_mcp.endpoints import build_chain, is_relay_supported
from minecraft_names_mcp.resolver import AsyncNickResolver


def read_nicks(args) -> list[str]:
    """Collect nicks from positional arguments and --file."""
    nicks = [n.strip() for n in args.nicks if n.strip()]

    if args.file:
        if args.file == "-":
            text = sys.stdin.read()
        else:
            with open(args.file, "r", encoding="utf-8") as f:
                text = f.read()
        nicks.extend(parse_nick_list(text))

    return nicks


def print_record(record: ResultRecord) -> None:
    if record.status == RecordStatus.ERROR:
        symbol = "!"
        status = f"ERROR: {record.error_message}"
    elif record.status == RecordStatus.AVAILABLE:
        symbol = "+"
        status = "AVAILABLE"
    elif record.status == RecordStatus.TAKEN:
        symbol = "-"
        status = "TAKEN"
    else:
        symbol = "?"
        status = "UNCHECKED"

    print(f"[{symbol}] {record.nick}: {status}", flush=True)


async def run_batch(batch: NickBatch, nicks: list[str], delay: float, timeout: float, relays: list[str], live: bool):
    resolver = AsyncNickResolver(chain=build_chain(relays), timeout=timeout)
    async with resolver:
        await batch.run(nicks, resolver, delay=delay, on_update=print_record if live else None)


def main():
    parser = argparse.ArgumentParser(
        description="Check Minecraft nick availability",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s Notch
    %(prog)s coolnick nicecape --delay 1
    %(prog)s --file nicks.txt --json
    %(prog)s brandname --relays allorigins,codetabs

Note:
    Nicks are checked one at a time. A 0.5-second delay is added between
    requests by default to avoid Mojang rate limiting (403/429).
        """
    )
    parser.add_argument(
        "nicks",
        nargs="*",
        help="Nicks to check"
    )
    parser.add_argument(
        "--file",
        type=str,
        default=None,
        help="Read nicks from a file, one per line ('-' for stdin)"
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=None,
        help=f"Delay between nicks in seconds (default: {get_pacing_delay()})"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help=f"Per-request timeout in seconds (default: {get_request_timeout()})"
    )
    parser.add_argument(
        "--relays",
        type=str,
        default=None,
        help=f"Comma-separated relay order (default: {','.join(get_relay_names())})"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON"
    )

    args = parser.parse_args()

    nicks = read_nicks(args)
    if not nicks:
        parser.error("no nicks given")

    relays = get_relay_names()
    if args.relays is not None:
        relays = [r.strip().lower() for r in args.relays.split(",") if r.strip()]
        unknown = [r for r in relays if not is_relay_supported(r)]
        if unknown:
            parser.error(f"unknown relays: {', '.join(unknown)}")

    delay = args.delay if args.delay is not None else get_pacing_delay()
    timeout = args.timeout if args.timeout is not None else get_request_timeout()

    if not args.json:
        print(f"\nChecking {len(nicks)} nicks:\n")

    batch = NickBatch()
    try:
        asyncio.run(run_batch(batch, nicks, delay, timeout, relays, live=not args.json))
    except KeyboardInterrupt:
        batch.stop()
        print("\nInterrupted.", file=sys.stderr)

    stats = batch.stats()

    if args.json:
        output = {
            "results": [
                {
                    "nick": r.nick,
                    "status": r.status.value,
                    "error": r.error_message,
                }
                for r in batch.results.values()
            ],
            "available": batch.available_nicks(),
            "summary": {
                "total": stats.total,
                "available": stats.available,
                "taken": stats.taken,
                "errors": stats.errors,
                "unchecked": stats.checking,
            },
        }
        print(json.dumps(output, indent=2))
        return

    print()
    print(f"Total: {stats.total}  Available: {stats.available}  "
          f"Taken: {stats.taken}  Errors: {stats.errors}")
    if stats.checking:
        print(f"Unchecked: {stats.checking}")

    available = batch.available_nicks()
    if available:
        print("\nAvailable nicks:")
        for nick in available:
            print(f"    {nick}")


if __name__ == "__main__":
    main()
