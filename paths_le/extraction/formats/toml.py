"""TOML extractor built on the standard-library ``tomllib`` parser."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass

from ..base import ExtractedPath
from ..classify import GENERIC_RULES, SPACED_PATH_LIKE
from ..collect import TreeWalker
from ..registry import registry

# tomllib exposes no per-value line numbers, so every record sits at the
# document start and carries a fixed label instead of a key trail.
_WALKER = TreeWalker(
    predicate=SPACED_PATH_LIKE,
    value_label=lambda _trail: "TOML value",
    key_label=lambda _trail: "TOML key",
    rules=GENERIC_RULES,
)


def extract_from_toml(content: str) -> list[ExtractedPath]:
    if not content.strip():
        return []

    try:
        document = tomllib.loads(content)
    except tomllib.TOMLDecodeError:
        return []

    return _WALKER.walk(document)


@dataclass(slots=True)
class TomlExtractor:
    """Concrete :class:`PathExtractor` for TOML documents."""

    name: str = "toml"

    def extract(self, content: str) -> list[ExtractedPath]:
        return extract_from_toml(content)


toml_extractor = TomlExtractor()
registry.register_extractor(toml_extractor, categories=("toml",), replace=True)

__all__ = ["TomlExtractor", "extract_from_toml", "toml_extractor"]
