"""Pre-flight thresholds that keep very large documents from stalling a run."""

from __future__ import annotations

import re
import time
from dataclasses import dataclass, field

from paths_le.config import SafetyConfig
from paths_le.errors import ErrorCategory, ErrorSeverity, PathsLeError, create_error

ESTIMATED_PATH_WARN_COUNT = 1000
COMPLEX_PATTERN_WARN_COUNT = 100

_PATH_ESTIMATORS = (
    re.compile(r"""/[^\s"'<>|*?]+"""),
    re.compile(r"""[A-Za-z]:\\[^\s"'<>|*?]+"""),
    re.compile(r"""\.\.?/[^\s"'<>|*?]+"""),
)
_QUOTED = re.compile(r"""["'][^"']*["']""")
_COMPLEX_PATTERNS = (
    re.compile(r"\{[^{}]*\{[^{}]*\}[^{}]*\}"),
    re.compile(r"\[[^\[\]]*\[[^\[\]]*\][^\[\]]*\]"),
    re.compile(r"/[^/\n]+/[gimuy]*"),
    re.compile(r"`[^`]*\$\{[^}]*\}[^`]*`"),
)


@dataclass(frozen=True, slots=True)
class SafetyResult:
    proceed: bool
    message: str
    error: PathsLeError | None = None
    warnings: tuple[str, ...] = field(default_factory=tuple)


def estimate_path_count(content: str) -> int:
    """Rough count of path-shaped substrings, used only for warnings."""

    total = sum(len(pattern.findall(content)) for pattern in _PATH_ESTIMATORS)
    total += sum(1 for quoted in _QUOTED.findall(content) if "/" in quoted or "\\" in quoted)
    return total


def count_complex_patterns(content: str) -> int:
    return sum(len(pattern.findall(content)) for pattern in _COMPLEX_PATTERNS)


def check_content_safety(content: str, config: SafetyConfig, *, source: str | None = None) -> SafetyResult:
    """Decide whether ``content`` is small enough to process.

    An oversized document stops the run with a non-recoverable
    ``performance`` error. Line-count and heuristic thresholds only add
    warnings.
    """

    if not config.enabled:
        return SafetyResult(proceed=True, message="")

    size = len(content)
    if size > config.file_size_warn_bytes:
        message = (
            f"File size ({size} bytes) exceeds safety threshold "
            f"({config.file_size_warn_bytes} bytes)"
        )
        metadata: dict[str, object] = {"fileSize": size, "threshold": config.file_size_warn_bytes}
        if source is not None:
            metadata["fileName"] = source
        error = create_error(
            ErrorCategory.PERFORMANCE,
            message,
            severity=ErrorSeverity.WARNING,
            recoverable=False,
            context="Consider splitting the file or increasing the safety threshold",
            metadata=metadata,
        )
        return SafetyResult(proceed=False, message=message, error=error)

    warnings: list[str] = []
    line_count = len(content.split("\n"))
    if line_count > config.large_output_lines_threshold:
        warnings.append(
            f"Large file detected: {line_count} lines "
            f"(threshold: {config.large_output_lines_threshold})"
        )

    estimated = estimate_path_count(content)
    if estimated > ESTIMATED_PATH_WARN_COUNT:
        warnings.append(f"Large number of paths detected: estimated {estimated} paths")

    complex_count = count_complex_patterns(content)
    if complex_count > COMPLEX_PATTERN_WARN_COUNT:
        warnings.append(f"Complex patterns detected: {complex_count} patterns")

    message = (
        f"Safety checks passed with {len(warnings)} warnings" if warnings else "Safety checks passed"
    )
    return SafetyResult(proceed=True, message=message, warnings=tuple(warnings))


def should_cancel_operation(
    processed_items: int,
    threshold: int,
    started_at: float,
    max_seconds: float = 30.0,
) -> bool:
    """Return True once a batch has exceeded its item or wall-clock budget.

    ``started_at`` is a :func:`time.monotonic` reading.
    """

    return processed_items > threshold or (time.monotonic() - started_at) > max_seconds


__all__ = [
    "COMPLEX_PATTERN_WARN_COUNT",
    "ESTIMATED_PATH_WARN_COUNT",
    "SafetyResult",
    "check_content_safety",
    "count_complex_patterns",
    "estimate_path_count",
    "should_cancel_operation",
]
