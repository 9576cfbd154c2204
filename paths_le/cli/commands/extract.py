"""CLI command for extracting paths from documents."""

from __future__ import annotations

import argparse
import csv
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from paths_le.config import OUTPUT_FORMATS, PathsLeConfig
from paths_le.core import (
    PathResolutionOptions,
    check_content_safety,
    resolve_path_canonical,
)
from paths_le.errors import ErrorCategory
from paths_le.extraction import ExtractedPath, extract_paths, guess_language_id

from ..common import build_resolver, print_json, workspace_folders

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FoundPath:
    source: str
    path: ExtractedPath
    resolved: str | None = None

    @property
    def display_value(self) -> str:
        return self.resolved if self.resolved is not None else self.path.value


def register_commands(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    """Add the ``extract`` subcommand to the main CLI parser."""
    parser = subparsers.add_parser(
        "extract",
        description="Extract file paths and URLs from documents.",
        help="Extract paths from one or more files.",
    )
    parser.add_argument("files", nargs="+", type=Path, help="Documents to scan.")
    parser.add_argument(
        "--format",
        dest="format_id",
        help="Language id to use instead of inferring it from each file name (e.g. json, scss).",
    )
    parser.add_argument(
        "--output",
        choices=list(OUTPUT_FORMATS),
        help="Output format (default from configuration).",
    )
    parser.add_argument(
        "--dedupe",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Drop repeated path values, keeping the first occurrence.",
    )
    parser.add_argument(
        "--canonical",
        action="store_true",
        help="Resolve each path against the workspace and through symlinks.",
    )
    parser.add_argument(
        "--show-errors",
        action="store_true",
        default=None,
        help="Report parse errors on stderr.",
    )
    parser.set_defaults(func=extract_cli, command="extract")


def extract_cli(args: argparse.Namespace) -> int:
    """Execute the extraction workflow."""

    config: PathsLeConfig = args.settings
    show_errors = config.show_parse_errors if args.show_errors is None else args.show_errors
    dedupe = config.dedupe if args.dedupe is None else args.dedupe
    output = args.output or config.output_format

    found: list[FoundPath] = []
    failures = 0

    if config.safety.enabled and len(args.files) > config.safety.many_documents_threshold:
        logger.warning(
            "Processing %d documents exceeds the many-documents threshold (%d)",
            len(args.files),
            config.safety.many_documents_threshold,
        )

    for file_path in args.files:
        try:
            content = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            print(f"error: cannot read {file_path}: {exc}", file=sys.stderr)
            failures += 1
            continue

        safety = check_content_safety(content, config.safety, source=str(file_path))
        if not safety.proceed:
            print(f"error: {file_path}: {safety.message}", file=sys.stderr)
            failures += 1
            continue
        for warning in safety.warnings:
            logger.warning("%s: %s", file_path, warning)

        language_id = args.format_id or guess_language_id(file_path)
        result = extract_paths(content, language_id, filepath=str(file_path))
        if not result.success:
            failures += 1
            for error in result.errors:
                if error.category is ErrorCategory.FORMAT or show_errors:
                    print(f"{error.severity.value}: {file_path}: {error.message}", file=sys.stderr)

        found.extend(FoundPath(source=str(file_path), path=path) for path in result.paths)

    if dedupe:
        found = _dedupe_found(found)

    resolution = _resolution_options(config, canonical=args.canonical)
    if resolution is not None:
        resolver = build_resolver(config)
        folders = workspace_folders(config)
        found = [
            FoundPath(
                source=item.source,
                path=item.path,
                resolved=resolve_path_canonical(
                    item.path.value,
                    resolution,
                    resolver=resolver,
                    workspace_folders=folders,
                ),
            )
            for item in found
        ]

    args.meter.items = len(found)
    _render(found, output)
    return 1 if failures else 0


def _dedupe_found(found: list[FoundPath]) -> list[FoundPath]:
    seen: set[str] = set()
    unique: list[FoundPath] = []
    for item in found:
        if item.path.value in seen:
            continue
        seen.add(item.path.value)
        unique.append(item)
    return unique


def _resolution_options(config: PathsLeConfig, *, canonical: bool) -> PathResolutionOptions | None:
    configured = PathResolutionOptions(
        resolve_symlinks=config.resolution.resolve_symlinks,
        resolve_workspace_relative=config.resolution.resolve_workspace_relative,
    )
    if configured.enabled:
        return configured
    if canonical:
        return PathResolutionOptions(resolve_symlinks=True, resolve_workspace_relative=True)
    return None


def _render(found: list[FoundPath], output: str) -> None:
    if output == "json":
        payload = []
        for item in found:
            entry = item.path.to_dict()
            entry["source"] = item.source
            if item.resolved is not None:
                entry["resolved"] = item.resolved
            payload.append(entry)
        print_json(payload)
        return

    if output == "csv":
        writer = csv.writer(sys.stdout, lineterminator="\n")
        writer.writerow(["value", "type", "line", "column", "context", "source"])
        for item in found:
            writer.writerow(
                [
                    item.display_value,
                    item.path.type.value,
                    item.path.position.line,
                    item.path.position.column,
                    item.path.context,
                    item.source,
                ]
            )
        return

    for item in found:
        print(item.display_value)


__all__ = ["extract_cli", "register_commands"]
