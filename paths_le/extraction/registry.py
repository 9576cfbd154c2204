"""Extractor registry for routing language ids to concrete implementations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence

from .base import PathExtractor

FORMAT_CATEGORIES: dict[str, str] = {
    "csv": "csv",
    "toml": "toml",
    "dotenv": "dotenv",
    "env": "dotenv",
    "javascript": "javascript",
    "javascriptreact": "javascript",
    "typescript": "typescript",
    "typescriptreact": "typescript",
    "json": "json",
    "jsonc": "json",
    "html": "html",
    "css": "css",
    "scss": "css",
    "less": "css",
}
"""Fixed lookup from editor language ids to internal format categories."""

SUPPORTED_FORMATS: tuple[str, ...] = (
    "csv",
    "toml",
    "dotenv",
    "javascript",
    "typescript",
    "json",
    "html",
    "css",
)


def determine_format_category(language_id: str) -> str | None:
    """Map a language id to its format category, or ``None`` when unsupported."""

    return FORMAT_CATEGORIES.get(language_id)


@dataclass(slots=True)
class _RegistryEntry:
    extractor: PathExtractor
    categories: tuple[str, ...]


class ExtractorRegistry:
    """Manage extractor implementations keyed by format category."""

    def __init__(self) -> None:
        self._entries: list[_RegistryEntry] = []

    def register_extractor(
        self,
        extractor: PathExtractor,
        *,
        categories: Sequence[str],
        replace: bool = False,
    ) -> None:
        if not extractor.name:
            raise ValueError("Extractor must define a non-empty name")

        normalized = tuple(dict.fromkeys(item.strip().lower() for item in categories if item.strip()))
        if not normalized:
            raise ValueError(f"Extractor '{extractor.name}' must handle at least one category")

        if not replace and any(entry.extractor.name == extractor.name for entry in self._entries):
            raise ValueError(f"Extractor '{extractor.name}' already registered")

        self._entries = [entry for entry in self._entries if entry.extractor.name != extractor.name]
        self._entries.append(_RegistryEntry(extractor=extractor, categories=normalized))

    def unregister(self, name: str) -> None:
        self._entries = [entry for entry in self._entries if entry.extractor.name != name]

    def get_registered_names(self) -> list[str]:
        return [entry.extractor.name for entry in self._entries]

    def find_extractor(self, language_id: str) -> PathExtractor | None:
        category = determine_format_category(language_id)
        if category is None:
            return None
        # Later registrations shadow earlier ones for the same category.
        for entry in reversed(self._entries):
            if category in entry.categories:
                return entry.extractor
        return None

    def __iter__(self) -> Iterator[PathExtractor]:
        for entry in self._entries:
            yield entry.extractor


registry = ExtractorRegistry()
"""Default global extractor registry."""

__all__ = [
    "ExtractorRegistry",
    "FORMAT_CATEGORIES",
    "SUPPORTED_FORMATS",
    "determine_format_category",
    "registry",
]
