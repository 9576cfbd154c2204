"""Path-likeness predicates and per-format classification rule sets.

Each extractor family carries its own rule set because the families disagree
on small details (protocol-relative URLs, forward-slash drive letters, HTML
fragments). Keeping them as data lets every extractor share one ``classify``
implementation without changing what any of them reports.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .base import PathType


@dataclass(frozen=True, slots=True)
class ClassifierRules:
    """Ordered classification rules; the first matching rule wins."""

    name: str
    url_prefixes: tuple[str, ...]
    drive_pattern: re.Pattern[str] | None
    fragment_is_unknown: bool = False
    directory_suffix: bool = False


GENERIC_RULES = ClassifierRules(
    name="generic",
    url_prefixes=("http://", "https://", "file://"),
    drive_pattern=re.compile(r"[A-Za-z]:\\"),
)

MODULE_RULES = ClassifierRules(
    name="module",
    url_prefixes=("http://", "https://", "file://"),
    drive_pattern=re.compile(r"[A-Za-z]:[/\\]"),
)

MARKUP_RULES = ClassifierRules(
    name="markup",
    url_prefixes=("http://", "https://", "//"),
    drive_pattern=None,
    fragment_is_unknown=True,
)

STYLESHEET_RULES = ClassifierRules(
    name="stylesheet",
    url_prefixes=("http://", "https://", "//"),
    drive_pattern=None,
)


def classify(value: str, rules: ClassifierRules = GENERIC_RULES) -> PathType:
    """Assign a :class:`PathType` to ``value``. Never raises."""

    if value.startswith(rules.url_prefixes):
        return PathType.URL
    if value.startswith("/"):
        return PathType.ABSOLUTE
    if rules.drive_pattern is not None and rules.drive_pattern.match(value):
        return PathType.ABSOLUTE
    if value.startswith(("./", "../")):
        return PathType.RELATIVE
    if rules.fragment_is_unknown and value.startswith("#"):
        return PathType.UNKNOWN
    if rules.directory_suffix and value.endswith(("/", "\\")):
        return PathType.DIRECTORY
    if "." in value:
        return PathType.FILE
    return PathType.UNKNOWN


@dataclass(frozen=True, slots=True)
class PathLikePredicate:
    """Lenient heuristic deciding whether a string resembles a path or URL."""

    name: str
    min_length: int
    patterns: tuple[re.Pattern[str], ...]

    def __call__(self, value: str) -> bool:
        if not value or len(value) < self.min_length:
            return False
        return any(pattern.fullmatch(value) for pattern in self.patterns)


_COMPACT = r"""[^\s"'<>|*?]"""
_SPACED = r"""[^"'<>|*?]"""

COMPACT_PATH_LIKE = PathLikePredicate(
    name="compact",
    min_length=2,
    patterns=tuple(
        re.compile(pattern)
        for pattern in (
            rf"/{_COMPACT}+",
            rf"[A-Za-z]:\\{_COMPACT}+",
            rf"\.\.?/{_COMPACT}+",
            rf"https?://{_COMPACT}+",
            rf"file://{_COMPACT}+",
            rf"{_COMPACT}+\.[a-zA-Z0-9]+",
            rf"{_COMPACT}+/{_COMPACT}+",
        )
    ),
)

SPACED_PATH_LIKE = PathLikePredicate(
    name="spaced",
    min_length=2,
    patterns=tuple(
        re.compile(pattern)
        for pattern in (
            rf"/{_SPACED}+",
            rf"[A-Za-z]:\\{_SPACED}+",
            rf"\.\.?/{_SPACED}+",
            rf"https?://{_SPACED}+",
            rf"file://{_SPACED}+",
            rf"{_SPACED}+\.[a-zA-Z0-9]+",
            rf"{_SPACED}+/{_SPACED}+",
        )
    ),
)

JSON_PATH_LIKE = PathLikePredicate(
    name="json",
    min_length=3,
    patterns=tuple(
        re.compile(pattern)
        for pattern in (
            rf"/{_SPACED}+",
            rf"[A-Za-z]:\\{_SPACED}+",
            rf"\.\.?/{_SPACED}+",
            rf"https?://{_COMPACT}+",
            rf"file://{_COMPACT}+",
            r"""[^"'<>|*?\s/\\]{3,}\.[a-zA-Z]{2,}""",
        )
    ),
)


def is_path_like(value: str) -> bool:
    """Default predicate used by the generic tree collector."""

    return COMPACT_PATH_LIKE(value)


__all__ = [
    "COMPACT_PATH_LIKE",
    "ClassifierRules",
    "GENERIC_RULES",
    "JSON_PATH_LIKE",
    "MARKUP_RULES",
    "MODULE_RULES",
    "PathLikePredicate",
    "SPACED_PATH_LIKE",
    "STYLESHEET_RULES",
    "classify",
    "is_path_like",
]
