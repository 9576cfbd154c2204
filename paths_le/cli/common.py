"""Helpers shared by the CLI sub-commands."""

from __future__ import annotations

import json
import math
import os
import sys
import time
from pathlib import Path
from typing import Any, Callable

from paths_le.config import PathsLeConfig
from paths_le.core import PathResolver, ResolutionCache, WorkspaceFolder, should_cancel_operation

STDIN_MARKER = "-"


def read_source(source: str | None) -> str:
    """Return the text of ``source``, reading standard input for ``-`` or ``None``."""

    if source is None or source == STDIN_MARKER:
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def read_lines(source: str | None) -> list[str]:
    return read_source(source).split("\n")


def print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def build_resolver(config: PathsLeConfig) -> PathResolver:
    return PathResolver(cache=ResolutionCache(limit=config.performance.max_cache_size))


def batch_stop_check(config: PathsLeConfig) -> Callable[[int], bool]:
    """Build a ``should_stop`` callback bounding a batch by item count and wall time.

    The item cap is ``safety.large_output_lines_threshold`` and the time cap is
    ``performance.max_duration_ms``; a disabled section lifts its cap.
    """

    threshold = config.safety.large_output_lines_threshold if config.safety.enabled else sys.maxsize
    max_seconds = config.performance.max_duration_ms / 1000 if config.performance.enabled else math.inf
    started_at = time.monotonic()

    def should_stop(processed: int) -> bool:
        return should_cancel_operation(processed, threshold, started_at, max_seconds)

    return should_stop


def workspace_folders(config: PathsLeConfig) -> tuple[WorkspaceFolder, ...]:
    roots = config.workspace_roots or (os.getcwd(),)
    return tuple(WorkspaceFolder(root=root) for root in roots)


class LocalFilesystemProbe:
    """Existence and permission checks against the local filesystem."""

    def exists(self, path: str) -> bool:
        return os.path.lexists(path)

    def permissions(self, path: str) -> str:
        readable = os.access(path, os.R_OK)
        writable = os.access(path, os.W_OK)
        if readable and writable:
            return "read-write"
        if readable:
            return "read-only"
        return "no-access"


__all__ = [
    "LocalFilesystemProbe",
    "STDIN_MARKER",
    "batch_stop_check",
    "build_resolver",
    "print_json",
    "read_lines",
    "read_source",
    "workspace_folders",
]
