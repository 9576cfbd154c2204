"""Dispatch document text to the extractor for its declared format."""

from __future__ import annotations

import logging
import traceback
from pathlib import Path

from paths_le.errors import ErrorCategory, ErrorSeverity, ParseError, RecoveryAction

from . import formats  # noqa: F401  (registers the built-in extractors)
from .base import ExtractedPath, ExtractionResult
from .registry import SUPPORTED_FORMATS, ExtractorRegistry, registry

logger = logging.getLogger(__name__)

_SUFFIX_LANGUAGE_IDS: dict[str, str] = {
    ".csv": "csv",
    ".toml": "toml",
    ".env": "dotenv",
    ".js": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".jsx": "javascriptreact",
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "typescriptreact",
    ".json": "json",
    ".jsonc": "jsonc",
    ".html": "html",
    ".htm": "html",
    ".css": "css",
    ".scss": "scss",
    ".less": "less",
}


def guess_language_id(path: str | Path) -> str:
    """Infer a language id from a file name, falling back to ``plaintext``."""

    candidate = Path(path)
    name = candidate.name.lower()
    if name == ".env" or name.startswith(".env."):
        return "dotenv"
    return _SUFFIX_LANGUAGE_IDS.get(candidate.suffix.lower(), "plaintext")


def _unsupported_format_error(language_id: str) -> ParseError:
    return ParseError(
        category=ErrorCategory.FORMAT,
        severity=ErrorSeverity.INFO,
        message=(
            f"Path extraction is not supported for {language_id} files. "
            "Supported formats: CSV, TOML, ENV, JS, TS, JSON, HTML, CSS."
        ),
        context=f"File type: {language_id}",
        recoverable=False,
        recovery_action=RecoveryAction.NONE,
        metadata={
            "languageId": language_id,
            "supportedFormats": list(SUPPORTED_FORMATS),
        },
    )


def _parsing_error(exc: Exception, *, filepath: str | None) -> ParseError:
    """Wrap an extractor failure.

    Every raised value is an exception here, so the fallback message covers
    exceptions constructed without one (e.g. ``ValueError()``).
    """

    stack = "".join(traceback.format_exception(exc)) if exc.__traceback__ else None
    return ParseError(
        category=ErrorCategory.PARSING,
        severity=ErrorSeverity.ERROR,
        message=str(exc) or "Unknown parsing error",
        recoverable=True,
        recovery_action=RecoveryAction.SKIP,
        stack=stack,
        filepath=filepath,
    )


def extract_paths(
    content: str,
    format_id: str,
    *,
    registry_override: ExtractorRegistry | None = None,
    filepath: str | None = None,
) -> ExtractionResult:
    """Extract paths from ``content`` using the extractor registered for ``format_id``.

    Unsupported formats and extractor failures are reported through
    ``ExtractionResult.errors`` rather than raised.
    """

    active_registry = registry_override or registry
    extractor = active_registry.find_extractor(format_id)
    if extractor is None:
        logger.debug("No extractor registered for format '%s'", format_id)
        return ExtractionResult(errors=(_unsupported_format_error(format_id),))

    try:
        found: list[ExtractedPath] = extractor.extract(content)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Extractor '%s' failed", extractor.name)
        return ExtractionResult(errors=(_parsing_error(exc, filepath=filepath),))

    return ExtractionResult(paths=tuple(found))


def extract_file(
    path: str | Path,
    *,
    format_id: str | None = None,
    registry_override: ExtractorRegistry | None = None,
) -> ExtractionResult:
    """Read a local UTF-8 file and extract paths from it."""

    source = Path(path)
    content = source.read_text(encoding="utf-8")
    language_id = format_id or guess_language_id(source)
    return extract_paths(
        content,
        language_id,
        registry_override=registry_override,
        filepath=str(source),
    )


__all__ = ["extract_file", "extract_paths", "guess_language_id"]
