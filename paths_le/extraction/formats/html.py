"""HTML extractor for path-bearing attributes."""

from __future__ import annotations

import re
from dataclasses import dataclass

from ..base import ExtractedPath, SourcePosition
from ..classify import MARKUP_RULES, classify
from ..registry import registry

PATH_ATTRIBUTES: tuple[str, ...] = (
    "src",
    "href",
    "data",
    "action",
    "poster",
    "background",
    "cite",
    "formaction",
    "icon",
    "manifest",
    "srcset",
)

_ATTRIBUTE_PATTERN = re.compile(
    r"""(""" + "|".join(PATH_ATTRIBUTES) + r""")\s*=\s*["']([^"']+)["']""",
    re.IGNORECASE,
)
_WHITESPACE_PATTERN = re.compile(r"\s+")


def _is_data_url(value: str) -> bool:
    return value.startswith("data:")


def _is_javascript_url(value: str) -> bool:
    return value.startswith("javascript:")


def _srcset_candidates(srcset: str) -> list[str]:
    """Return the URL part of each ``url descriptor`` entry, left to right."""

    candidates: list[str] = []
    for entry in srcset.split(","):
        parts = _WHITESPACE_PATTERN.split(entry.strip())
        url = parts[0] if parts else ""
        if url and not _is_data_url(url):
            candidates.append(url)
    return candidates


def extract_from_html(content: str) -> list[ExtractedPath]:
    if not content.strip():
        return []

    paths: list[ExtractedPath] = []
    for line_number, line in enumerate(content.split("\n"), start=1):
        if not line:
            continue
        for match in _ATTRIBUTE_PATTERN.finditer(line):
            attribute = match.group(1).lower()
            value = match.group(2)
            position = SourcePosition(line=line_number, column=match.start() + 1)

            if attribute == "srcset":
                for url in _srcset_candidates(value):
                    paths.append(
                        ExtractedPath(
                            value=url,
                            type=classify(url, MARKUP_RULES),
                            position=position,
                            context="HTML srcset",
                        )
                    )
                continue

            if _is_data_url(value) or _is_javascript_url(value):
                continue
            paths.append(
                ExtractedPath(
                    value=value,
                    type=classify(value, MARKUP_RULES),
                    position=position,
                    context=f"HTML {attribute}",
                )
            )
    return paths


@dataclass(slots=True)
class HtmlExtractor:
    """Concrete :class:`PathExtractor` for HTML markup."""

    name: str = "html"

    def extract(self, content: str) -> list[ExtractedPath]:
        return extract_from_html(content)


html_extractor = HtmlExtractor()
registry.register_extractor(html_extractor, categories=("html",), replace=True)

__all__ = ["HtmlExtractor", "PATH_ATTRIBUTES", "extract_from_html", "html_extractor"]
