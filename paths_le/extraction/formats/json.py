"""JSON extractor: parses with :mod:`json` and walks string leaves."""

from __future__ import annotations

import json
from dataclasses import dataclass

from ..base import ExtractedPath
from ..classify import GENERIC_RULES, JSON_PATH_LIKE
from ..collect import Trail, TreeWalker
from ..registry import registry


def _json_context(trail: Trail) -> str:
    if not trail:
        return "JSON value"
    rendered = ""
    for segment in trail:
        if isinstance(segment, int):
            rendered += f"[{segment}]"
        elif rendered:
            rendered += f".{segment}"
        else:
            rendered = segment
    return f"JSON {rendered}"


# Object keys are never reported for JSON; only string values are candidates.
_WALKER = TreeWalker(
    predicate=JSON_PATH_LIKE,
    value_label=_json_context,
    rules=GENERIC_RULES,
    skip_none=False,
)


def extract_from_json(content: str) -> list[ExtractedPath]:
    """Extract path-like string values; backslash escapes are decoded by the parser."""

    if not content.strip():
        return []

    try:
        document = json.loads(content)
    except ValueError:
        return []

    return _WALKER.walk(document)


@dataclass(slots=True)
class JsonExtractor:
    """Concrete :class:`PathExtractor` for JSON and JSONC language ids."""

    name: str = "json"

    def extract(self, content: str) -> list[ExtractedPath]:
        return extract_from_json(content)


json_extractor = JsonExtractor()
registry.register_extractor(json_extractor, categories=("json",), replace=True)

__all__ = ["JsonExtractor", "extract_from_json", "json_extractor"]
