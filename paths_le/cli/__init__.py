"""Command-line interface for paths-le."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from paths_le.config import PRESETS, apply_preset, load_config
from paths_le.core import PerformanceMonitor
from paths_le.errors import ConfigurationError

from .commands import COMMAND_MODULES

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="paths-le",
        description="Extract, validate, and analyze file paths found in documents.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to a YAML config (default: config/paths-le.yaml when present).",
    )
    parser.add_argument(
        "--preset",
        choices=list(PRESETS),
        help="Apply a named preset on top of the loaded configuration.",
    )
    parser.add_argument(
        "--log-level",
        choices=list(LOG_LEVELS),
        default="WARNING",
        type=str.upper,
        help="Logging verbosity (default: WARNING).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    for module in COMMAND_MODULES:
        module.register_commands(subparsers)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config)
        if args.preset:
            config = apply_preset(config, args.preset)
    except (FileNotFoundError, ConfigurationError) as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 1

    args.settings = config
    monitor = PerformanceMonitor(config.performance)
    with monitor.track(args.command) as meter:
        args.meter = meter
        return args.func(args)


__all__ = ["build_parser", "main"]
