"""CSS extractor for ``@import`` targets and ``url()`` references."""

from __future__ import annotations

import re
from dataclasses import dataclass

from ..base import ExtractedPath, SourcePosition
from ..classify import STYLESHEET_RULES, classify
from ..registry import registry

_IMPORT_LINE_PATTERN = re.compile(r"@import\b")

# (pattern, context) pairs; an @import line only reports its import targets so
# the url() wrapped inside an @import is not counted twice.
_IMPORT_RULE = (
    re.compile(r"""@import\s+(?:url\s*\(\s*)?['"]([^'"]+)['"](?:\s*\))?""", re.IGNORECASE),
    "CSS @import",
)
_URL_RULE = (
    re.compile(r"""url\s*\(\s*['"]?([^'"()]+?)['"]?\s*\)""", re.IGNORECASE),
    "CSS url()",
)


def _scan(line: str, line_number: int, rule: tuple[re.Pattern[str], str]) -> list[ExtractedPath]:
    pattern, context = rule
    found: list[ExtractedPath] = []
    for match in pattern.finditer(line):
        value = match.group(1).strip()
        if not value or value.startswith("data:"):
            continue
        found.append(
            ExtractedPath(
                value=value,
                type=classify(value, STYLESHEET_RULES),
                position=SourcePosition(line=line_number, column=match.start() + 1),
                context=context,
            )
        )
    return found


def extract_from_css(content: str) -> list[ExtractedPath]:
    if not content.strip():
        return []

    paths: list[ExtractedPath] = []
    for line_number, line in enumerate(content.split("\n"), start=1):
        if not line:
            continue
        rule = _IMPORT_RULE if _IMPORT_LINE_PATTERN.search(line) else _URL_RULE
        paths.extend(_scan(line, line_number, rule))
    return paths


@dataclass(slots=True)
class CssExtractor:
    """Concrete :class:`PathExtractor` for CSS, SCSS, and Less stylesheets."""

    name: str = "css"

    def extract(self, content: str) -> list[ExtractedPath]:
        return extract_from_css(content)


css_extractor = CssExtractor()
registry.register_extractor(css_extractor, categories=("css",), replace=True)

__all__ = ["CssExtractor", "css_extractor", "extract_from_css"]
