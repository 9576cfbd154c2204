"""Aggregate statistics over batches of path strings."""

from __future__ import annotations

from collections import Counter
from typing import Callable, Iterable

from paths_le.config import AnalysisConfig
from paths_le.extraction.base import PathType

from .models import AnalysisResult, ValidationAnalysis
from .paths import analyze_path_patterns, detect_path_type, is_valid_path


def analyze_paths(
    lines: Iterable[str],
    config: AnalysisConfig | None = None,
    *,
    should_stop: Callable[[int], bool] | None = None,
) -> AnalysisResult:
    """Count, deduplicate, and classify ``lines``.

    Blank lines are dropped before counting. Duplicates are exact-string
    matches on the retained lines. When ``should_stop`` returns True for the
    number of paths classified so far, the remaining paths are left out of
    every statistic.
    """

    settings = config or AnalysisConfig()
    paths: list[str] = []
    types: Counter[PathType] = Counter()
    for line in lines:
        if not line.strip():
            continue
        if should_stop is not None and should_stop(len(paths)):
            break
        types[detect_path_type(line)] += 1
        paths.append(line)
    unique = len(set(paths))

    return AnalysisResult(
        count=len(paths),
        unique=unique,
        duplicates=len(paths) - unique,
        types=dict(types),
        validation=analyze_validation(paths) if settings.include_validation else None,
        patterns=analyze_path_patterns(paths) if settings.include_patterns else None,
    )


def analyze_validation(paths: list[str]) -> ValidationAnalysis:
    # Without filesystem access, broken links and read-only files cannot be detected.
    valid = sum(1 for path in paths if is_valid_path(path))
    invalid = len(paths) - valid
    return ValidationAnalysis(
        valid=valid,
        invalid=invalid,
        broken=0,
        inaccessible=invalid,
        permissions={"read-write": valid, "read-only": 0, "no-access": invalid},
    )


__all__ = ["analyze_paths", "analyze_validation"]
