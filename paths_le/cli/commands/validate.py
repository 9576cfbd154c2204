"""CLI command for validating a list of paths."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace

from paths_le.config import PathsLeConfig
from paths_le.core import PathResolutionOptions, ValidationStatus, validate_paths

from ..common import LocalFilesystemProbe, batch_stop_check, build_resolver, print_json, read_lines

logger = logging.getLogger(__name__)


def register_commands(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    """Add the ``validate`` subcommand to the main CLI parser."""
    parser = subparsers.add_parser(
        "validate",
        description="Validate one path per line from a file or standard input.",
        help="Validate paths for format, existence, and permissions.",
    )
    parser.add_argument("source", nargs="?", default="-", help="File of paths, or - for stdin.")
    parser.add_argument(
        "--check-existence",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Check each path on the local filesystem (default from configuration).",
    )
    parser.add_argument(
        "--check-permissions",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Report read/write access for existing paths.",
    )
    parser.add_argument(
        "--canonical",
        action="store_true",
        help="Include the canonical resolved form of each valid path.",
    )
    parser.add_argument("--output", choices=["text", "json"], default="text")
    parser.set_defaults(func=validate_cli, command="validate")


def validate_cli(args: argparse.Namespace) -> int:
    config: PathsLeConfig = args.settings
    settings = config.validation
    if args.check_existence is not None:
        settings = replace(settings, check_existence=args.check_existence)
    if args.check_permissions is not None:
        settings = replace(settings, check_permissions=args.check_permissions)
    if args.canonical:
        settings = replace(settings, resolve_canonical=True)

    try:
        lines = [line.strip() for line in read_lines(args.source)]
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: cannot read {args.source}: {exc}", file=sys.stderr)
        return 1
    paths = [line for line in lines if line]

    if not settings.enabled:
        print("Validation is disabled in configuration.", file=sys.stderr)
        return 0

    resolution = None
    if config.resolution.resolve_symlinks or config.resolution.resolve_workspace_relative:
        resolution = PathResolutionOptions(
            resolve_symlinks=config.resolution.resolve_symlinks,
            resolve_workspace_relative=config.resolution.resolve_workspace_relative,
        )

    results = validate_paths(
        paths,
        settings,
        probe=LocalFilesystemProbe(),
        resolver=build_resolver(config) if settings.resolve_canonical else None,
        resolution=resolution,
        should_stop=batch_stop_check(config),
    )
    args.meter.items = len(results)
    cancelled = len(results) < len(paths)
    if cancelled:
        logger.warning("Validation cancelled after %d of %d paths", len(results), len(paths))

    if args.output == "json":
        print_json([result.to_dict() for result in results])
    else:
        for result in results:
            line = f"{result.status.value}\t{result.path}"
            if result.resolved_path is not None:
                line += f"\t-> {result.resolved_path}"
            if result.error:
                line += f"\t({result.error})"
            print(line)

    if cancelled:
        return 1
    return 0 if all(result.status is ValidationStatus.VALID for result in results) else 1


__all__ = ["register_commands", "validate_cli"]
