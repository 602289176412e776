from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from wsprobe.probe.config import get_settings
from wsprobe.probe.constants import EXIT_CODES
from wsprobe.probe.models import Endpoint
from wsprobe.probe.report import render
from wsprobe.probe.runner import run


def _read_messages(path: Path) -> list[str]:
    # one message per line; blank lines are skipped
    lines = path.read_text(encoding="utf-8").splitlines()
    return [line for line in lines if line.strip()]


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()

    ap = argparse.ArgumentParser(description="Probe a WebSocket endpoint with a fixed message sequence.")
    ap.add_argument(
        "url",
        nargs="?",
        default=settings.url,
        help=f"WebSocket URL, e.g. wss://example.org:443 (default: {settings.url})",
    )
    src = ap.add_mutually_exclusive_group()
    src.add_argument(
        "-m",
        "--message",
        dest="messages",
        action="append",
        default=None,
        help="Message to send after the connection opens (repeatable; replaces the default sequence)",
    )
    src.add_argument("--in", dest="inp", default=None, help="Read messages from a text file, one per line")
    src.add_argument("--no-messages", action="store_true", help="Connect and wait for close without sending")
    ap.add_argument(
        "--timeout",
        type=float,
        default=settings.timeout_s,
        help=f"Maximum probe lifetime in seconds (default: {settings.timeout_s:g})",
    )
    ap.add_argument("--json", action="store_true", help="Print the result as JSON")
    args = ap.parse_args(argv)

    if args.timeout <= 0:
        ap.error("--timeout must be positive")
    try:
        endpoint = Endpoint.parse(args.url)
    except ValueError as e:
        ap.error(f"invalid endpoint {args.url!r}: {e}")

    if args.no_messages:
        messages: list[str] = []
    elif args.inp:
        try:
            messages = _read_messages(Path(args.inp))
        except OSError as e:
            ap.error(f"cannot read {args.inp}: {e}")
    elif args.messages is not None:
        messages = args.messages
    else:
        messages = list(settings.messages)

    result = asyncio.run(run(endpoint, messages, args.timeout, settings=settings))
    print(render(result, as_json=args.json))
    return EXIT_CODES[result.outcome]


if __name__ == "__main__":
    sys.exit(main())
