"""String-level path utilities, format validation, and pattern analysis.

Nothing in this module touches the filesystem. The checks here are
deliberately stricter than the extraction heuristics: a value may look like
a path (and be extracted) while still failing :func:`validate_path_format`.
Scheme URLs and drive-letter paths both contain ``:`` and are therefore
always flagged invalid here.
"""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass

from paths_le.extraction.base import PathType

from .models import CommonPattern, PatternAnalysis

MAX_PATH_LENGTH = 260

_INVALID_CHARACTERS = re.compile(r'[<>:"|?*]')
_RESERVED_NAME = re.compile(r"^(CON|PRN|AUX|NUL|COM[1-9]|LPT[1-9])$", re.IGNORECASE)
_SEGMENT_SEPARATOR = re.compile(r"[/\\]")
_DRIVE_PREFIX = re.compile(r"^[A-Za-z]:[\\/]")
_URL_SCHEMES = ("http://", "https://", "ftp://")
_SENSITIVE_ROOTS = ("/etc/", "/sys/", "C:\\Windows\\")


@dataclass(frozen=True, slots=True)
class PathComponents:
    directory: str
    filename: str
    extension: str
    basename: str


@dataclass(frozen=True, slots=True)
class FormatValidation:
    """Result of :func:`validate_path_format`."""

    is_valid: bool
    errors: tuple[str, ...] = ()


def normalize_path(path: str) -> str:
    """Use forward slashes, collapse repeats, and drop a non-root trailing slash."""

    normalized = re.sub(r"/+", "/", path.replace("\\", "/"))
    if len(normalized) > 1 and normalized.endswith("/"):
        normalized = normalized[:-1]
    return normalized


def get_path_components(path: str) -> PathComponents:
    normalized = normalize_path(path)
    directory, _, filename = normalized.rpartition("/")
    stem, dot, extension = filename.rpartition(".")
    if not dot:
        return PathComponents(directory=directory, filename=filename, extension="", basename=filename)
    return PathComponents(directory=directory, filename=filename, extension=extension, basename=stem)


def get_path_depth(path: str) -> int:
    return len([part for part in normalize_path(path).split("/") if part])


def is_absolute_path(path: str) -> bool:
    return path.startswith("/") or _DRIVE_PREFIX.match(path) is not None


def is_relative_path(path: str) -> bool:
    if is_absolute_path(path):
        return False
    return path.startswith(("./", "../")) or "/" in path or "\\" in path


def is_file_path(path: str) -> bool:
    return bool(get_path_components(path).extension)


def is_directory_path(path: str) -> bool:
    if path.endswith(("/", "\\")):
        return True
    return not is_file_path(path) and ("/" in path or "\\" in path)


def get_file_extension(path: str) -> str:
    return get_path_components(path).extension.lower()


def join_relative_path(base_path: str, relative_path: str) -> str:
    """Resolve ``relative_path`` against the directory of ``base_path`` without canonicalising."""

    if is_absolute_path(relative_path):
        return normalize_path(relative_path)
    base_directory = get_path_components(base_path).directory
    return normalize_path(f"{base_directory}/{relative_path}")


def is_path_safe(path: str) -> bool:
    """Reject traversal, home expansion, and well-known system locations."""

    if ".." in path or "~" in path:
        return False
    if is_absolute_path(path) and path.startswith(_SENSITIVE_ROOTS):
        return False
    return True


def validate_path_format(path: str) -> FormatValidation:
    """Check ``path`` against the syntactic rules and collect every violation."""

    if not path or not path.strip():
        return FormatValidation(is_valid=False, errors=("Path is empty",))

    errors: list[str] = []
    if _INVALID_CHARACTERS.search(path):
        errors.append("Path contains invalid characters")

    reserved = [part for part in _SEGMENT_SEPARATOR.split(path) if _RESERVED_NAME.match(part)]
    if reserved:
        errors.append(f"Path contains reserved names: {', '.join(reserved)}")

    if ".." in path:
        errors.append("Path contains traversal sequences (..)")

    if len(path) > MAX_PATH_LENGTH:
        errors.append(f"Path exceeds maximum length ({MAX_PATH_LENGTH} characters)")

    return FormatValidation(is_valid=not errors, errors=tuple(errors))


def is_valid_path(path: str) -> bool:
    return validate_path_format(path).is_valid


def detect_path_type(path: str) -> PathType:
    """Classify a standalone path string for validation and analysis.

    This rule order differs from the per-extractor classifier in
    :mod:`paths_le.extraction.classify`: any separator makes a value
    ``relative``, and ``ftp://`` counts as a URL.
    """

    trimmed = path.strip()
    if trimmed.startswith(_URL_SCHEMES):
        return PathType.URL
    if trimmed.startswith("/") or _DRIVE_PREFIX.match(trimmed):
        return PathType.ABSOLUTE
    if trimmed.startswith(("./", "../")) or "/" in trimmed or "\\" in trimmed:
        return PathType.RELATIVE
    # Unreachable: a trailing separator already satisfied the relative rule.
    if trimmed.endswith(("/", "\\")):
        return PathType.DIRECTORY
    if "." in trimmed and not trimmed.endswith("."):
        return PathType.FILE
    return PathType.UNKNOWN


def extract_path_pattern(path: str) -> str:
    """Map letters to ``X`` and digits to ``N``, keeping punctuation literal."""

    return re.sub(r"[0-9]", "N", re.sub(r"[A-Za-z]", "X", path))


def detect_naming_convention(basename: str) -> str:
    if "_" in basename:
        return "snake_case"
    if "-" in basename:
        return "kebab-case"
    if re.search(r"[A-Z]", basename) and re.search(r"[a-z]", basename):
        return "camelCase"
    if basename == basename.upper():
        return "UPPERCASE"
    if basename == basename.lower():
        return "lowercase"
    return "mixed"


def analyze_path_patterns(paths: list[str], *, max_examples: int = 3) -> PatternAnalysis:
    """Group ``paths`` by structural pattern, depth, naming style, and extension."""

    pattern_examples: dict[str, list[str]] = {}
    pattern_counts: Counter[str] = Counter()
    depth_counts: Counter[str] = Counter()
    naming_counts: Counter[str] = Counter()
    extension_counts: Counter[str] = Counter()

    for path in paths:
        pattern = extract_path_pattern(normalize_path(path))
        pattern_counts[pattern] += 1
        examples = pattern_examples.setdefault(pattern, [])
        if len(examples) < max_examples:
            examples.append(path)

        depth_counts[str(get_path_depth(path))] += 1
        naming_counts[detect_naming_convention(get_path_components(path).basename)] += 1

        extension = get_file_extension(path)
        if extension:
            extension_counts[extension] += 1

    total = len(paths)
    # Counter.most_common is stable for ties, so first-seen patterns rank first.
    common_patterns = tuple(
        CommonPattern(
            pattern=pattern,
            count=count,
            percentage=(count / total) * 100 if total else 0.0,
            examples=tuple(pattern_examples[pattern]),
        )
        for pattern, count in pattern_counts.most_common()
    )

    return PatternAnalysis(
        common_patterns=common_patterns,
        depth_distribution=dict(depth_counts),
        naming_conventions=dict(naming_counts),
        extensions=dict(extension_counts),
    )


__all__ = [
    "FormatValidation",
    "MAX_PATH_LENGTH",
    "PathComponents",
    "analyze_path_patterns",
    "detect_naming_convention",
    "detect_path_type",
    "extract_path_pattern",
    "get_file_extension",
    "get_path_components",
    "get_path_depth",
    "is_absolute_path",
    "is_directory_path",
    "is_file_path",
    "is_path_safe",
    "is_relative_path",
    "is_valid_path",
    "join_relative_path",
    "normalize_path",
    "validate_path_format",
]
