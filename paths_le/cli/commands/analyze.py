"""CLI command for summarising a list of paths."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace

from paths_le.config import PathsLeConfig
from paths_le.core import AnalysisResult, analyze_paths

from ..common import batch_stop_check, print_json, read_lines

logger = logging.getLogger(__name__)

_TOP_PATTERNS = 5


def register_commands(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    """Add the ``analyze`` subcommand to the main CLI parser."""
    parser = subparsers.add_parser(
        "analyze",
        description="Report counts, types, validity, and naming patterns for a list of paths.",
        help="Analyze one path per line from a file or standard input.",
    )
    parser.add_argument("source", nargs="?", default="-", help="File of paths, or - for stdin.")
    parser.add_argument(
        "--no-validation",
        dest="include_validation",
        action="store_false",
        default=None,
        help="Skip the validation summary.",
    )
    parser.add_argument(
        "--no-patterns",
        dest="include_patterns",
        action="store_false",
        default=None,
        help="Skip pattern, depth, naming, and extension statistics.",
    )
    parser.add_argument("--output", choices=["text", "json"], default="text")
    parser.set_defaults(func=analyze_cli, command="analyze")


def analyze_cli(args: argparse.Namespace) -> int:
    config: PathsLeConfig = args.settings
    settings = config.analysis
    if args.include_validation is not None:
        settings = replace(settings, include_validation=args.include_validation)
    if args.include_patterns is not None:
        settings = replace(settings, include_patterns=args.include_patterns)

    if not settings.enabled:
        print("Analysis is disabled in configuration.", file=sys.stderr)
        return 0

    try:
        lines = read_lines(args.source)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: cannot read {args.source}: {exc}", file=sys.stderr)
        return 1

    result = analyze_paths(lines, settings, should_stop=batch_stop_check(config))
    args.meter.items = result.count
    total = sum(1 for line in lines if line.strip())
    if result.count < total:
        logger.warning("Analysis cancelled after %d of %d paths", result.count, total)
    if args.output == "json":
        print_json(result.to_dict())
    else:
        print(render_analysis(result))
    return 0


def render_analysis(result: AnalysisResult) -> str:
    lines = [
        f"Total paths: {result.count}",
        f"Unique paths: {result.unique}",
        f"Duplicates: {result.duplicates}",
        "",
        "Types:",
    ]
    lines.extend(f"  {path_type.value}: {total}" for path_type, total in result.types.items() if total)

    if result.validation is not None:
        validation = result.validation
        lines += [
            "",
            "Validation:",
            f"  valid: {validation.valid}",
            f"  invalid: {validation.invalid}",
            f"  broken: {validation.broken}",
            f"  inaccessible: {validation.inaccessible}",
        ]

    if result.patterns is not None:
        patterns = result.patterns
        lines += ["", "Common patterns:"]
        for pattern in patterns.common_patterns[:_TOP_PATTERNS]:
            lines.append(f"  {pattern.pattern} ({pattern.count}, {pattern.percentage:.1f}%)")
        if patterns.extensions:
            lines += ["", "Extensions:"]
            ranked = sorted(patterns.extensions.items(), key=lambda item: item[1], reverse=True)
            lines.extend(f"  .{extension}: {total}" for extension, total in ranked)
        if patterns.naming_conventions:
            lines += ["", "Naming conventions:"]
            lines.extend(f"  {name}: {total}" for name, total in patterns.naming_conventions.items())

    return "\n".join(lines)


__all__ = ["analyze_cli", "register_commands", "render_analysis"]
