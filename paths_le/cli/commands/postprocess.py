"""Line post-processing commands: ``dedupe`` and ``sort``."""

from __future__ import annotations

import argparse
import sys
from typing import Iterable

from paths_le.config import SORT_ORDERS, PathsLeConfig

from ..common import read_lines


def dedupe_lines(lines: Iterable[str]) -> list[str]:
    """Trim lines, drop blanks, and keep only the first copy of each value."""

    seen: set[str] = set()
    unique: list[str] = []
    for line in lines:
        value = line.strip()
        if not value or value in seen:
            continue
        seen.add(value)
        unique.append(value)
    return unique


def sort_lines(lines: Iterable[str], order: str = "asc") -> list[str]:
    if order not in SORT_ORDERS:
        raise ValueError(f"Unknown sort order '{order}'")
    values = [line.strip() for line in lines if line.strip()]
    if order in ("length-asc", "length-desc"):
        return sorted(values, key=len, reverse=order == "length-desc")
    return sorted(values, key=lambda value: (value.casefold(), value), reverse=order == "desc")


def register_commands(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    """Add the ``dedupe`` and ``sort`` subcommands to the main CLI parser."""
    dedupe_parser = subparsers.add_parser(
        "dedupe",
        description="Remove duplicate lines, preserving first-seen order.",
        help="Remove duplicate paths.",
    )
    dedupe_parser.add_argument("source", nargs="?", default="-", help="File of paths, or - for stdin.")
    dedupe_parser.set_defaults(func=dedupe_cli, command="dedupe")

    sort_parser = subparsers.add_parser(
        "sort",
        description="Sort lines alphabetically or by length.",
        help="Sort paths.",
    )
    sort_parser.add_argument("source", nargs="?", default="-", help="File of paths, or - for stdin.")
    sort_parser.add_argument(
        "--order",
        choices=list(SORT_ORDERS),
        help="Sort order (default from configuration).",
    )
    sort_parser.set_defaults(func=sort_cli, command="sort")


def dedupe_cli(args: argparse.Namespace) -> int:
    try:
        lines = read_lines(args.source)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: cannot read {args.source}: {exc}", file=sys.stderr)
        return 1
    args.meter.items = len(lines)
    for line in dedupe_lines(lines):
        print(line)
    return 0


def sort_cli(args: argparse.Namespace) -> int:
    config: PathsLeConfig = args.settings
    try:
        lines = read_lines(args.source)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: cannot read {args.source}: {exc}", file=sys.stderr)
        return 1
    args.meter.items = len(lines)
    for line in sort_lines(lines, args.order or config.sort_order):
        print(line)
    return 0


__all__ = ["dedupe_cli", "dedupe_lines", "register_commands", "sort_cli", "sort_lines"]
