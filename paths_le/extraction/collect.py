"""Recursive collection of path-like leaves from parsed document trees."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Union

from .base import DOCUMENT_START, ExtractedPath
from .classify import (
    COMPACT_PATH_LIKE,
    GENERIC_RULES,
    ClassifierRules,
    PathLikePredicate,
    classify,
)

Trail = tuple[Union[str, int], ...]
TrailLabeler = Callable[[Trail], str]


@dataclass(frozen=True, slots=True)
class TreeWalker:
    """Depth-first, pre-order walk over strings, sequences, and mappings.

    ``value_label`` names the context of a matching string leaf from the trail
    of keys and indices leading to it. When ``key_label`` is set, mapping keys
    are tested too and labelled from the trail of the mapping that owns them.
    """

    predicate: PathLikePredicate
    value_label: TrailLabeler
    key_label: TrailLabeler | None = None
    rules: ClassifierRules = GENERIC_RULES
    skip_none: bool = True

    def walk(self, value: Any) -> list[ExtractedPath]:
        found: list[ExtractedPath] = []
        self._visit(value, (), found)
        return found

    def _visit(self, value: Any, trail: Trail, found: list[ExtractedPath]) -> None:
        if isinstance(value, str):
            if self.predicate(value):
                found.append(self._record(value, self.value_label(trail)))
        elif isinstance(value, (list, tuple)):
            for index, item in enumerate(value):
                if item is None and self.skip_none:
                    continue
                self._visit(item, trail + (index,), found)
        elif isinstance(value, Mapping):
            for key, item in value.items():
                if item is None and self.skip_none:
                    continue
                key_text = str(key)
                if self.key_label is not None and self.predicate(key_text):
                    found.append(self._record(key_text, self.key_label(trail)))
                self._visit(item, trail + (key_text,), found)

    def _record(self, value: str, context: str) -> ExtractedPath:
        return ExtractedPath(
            value=value,
            type=classify(value, self.rules),
            position=DOCUMENT_START,
            context=context,
        )


def render_trail(root: str, trail: Trail) -> str:
    """Render a trail as ``root.key[0].child`` style context text."""

    parts = [root]
    for segment in trail:
        if isinstance(segment, int):
            parts.append(f"[{segment}]")
        else:
            parts.append(f".{segment}")
    return "".join(parts)


def collect_paths(value: Any, context: str = "root") -> list[ExtractedPath]:
    """Collect path-like strings and mapping keys from any parsed structure.

    Keys and values are both candidates, so a single mapping entry can yield
    two records. Numbers, booleans, and ``None`` contribute nothing.
    """

    walker = TreeWalker(
        predicate=COMPACT_PATH_LIKE,
        value_label=lambda trail: render_trail(context, trail),
        key_label=lambda trail: render_trail(context, trail) + ".key",
    )
    return walker.walk(value)


__all__ = ["Trail", "TreeWalker", "collect_paths", "render_trail"]
