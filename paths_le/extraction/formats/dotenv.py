"""Dotenv extractor: line-oriented ``KEY=VALUE`` scanning."""

from __future__ import annotations

import re
from dataclasses import dataclass

from ..base import ExtractedPath, SourcePosition
from ..classify import GENERIC_RULES, SPACED_PATH_LIKE, classify
from ..registry import registry

_ASSIGNMENT_PATTERN = re.compile(r"([^=]+)=(.*)", re.DOTALL)
_QUOTED_ASSIGNMENT_PATTERN = re.compile(r"""["']([^"']+)["']=(.*)""", re.DOTALL)
_EDGE_QUOTES_PATTERN = re.compile(r"""^["']|["']$""")

KEY_CONTEXT = "Environment variable name"


def _clean_value(raw: str) -> str:
    """Strip one surrounding quote on each side and halve doubled backslashes."""

    return _EDGE_QUOTES_PATTERN.sub("", raw).strip().replace("\\\\", "\\")


def _value_record(value: str, key: str, line_number: int, line: str) -> ExtractedPath:
    return ExtractedPath(
        value=value,
        type=classify(value, GENERIC_RULES),
        position=SourcePosition(line=line_number, column=line.index("=") + 1),
        context=f"Environment variable: {key}",
    )


def _key_record(key: str, line_number: int) -> ExtractedPath:
    return ExtractedPath(
        value=key,
        type=classify(key, GENERIC_RULES),
        position=SourcePosition(line=line_number, column=1),
        context=KEY_CONTEXT,
    )


def extract_from_dotenv(content: str) -> list[ExtractedPath]:
    if not content.strip():
        return []

    paths: list[ExtractedPath] = []
    for line_number, raw_line in enumerate(content.split("\n"), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue

        match = _ASSIGNMENT_PATTERN.fullmatch(line)
        if match:
            key, value = match.group(1), match.group(2)
            if not key or not value:
                continue
            clean_value = _clean_value(value)
            if SPACED_PATH_LIKE(clean_value):
                paths.append(_value_record(clean_value, key.strip(), line_number, line))
            clean_key = key.strip()
            if SPACED_PATH_LIKE(clean_key):
                paths.append(_key_record(clean_key, line_number))

        # "KEY"=value lines are matched by both shapes; the quoted form reports
        # the key first and without its quotes.
        quoted = _QUOTED_ASSIGNMENT_PATTERN.fullmatch(line)
        if quoted:
            key, value = quoted.group(1), quoted.group(2)
            if not key or not value:
                continue
            clean_value = _clean_value(value)
            if SPACED_PATH_LIKE(key):
                paths.append(_key_record(key, line_number))
            if SPACED_PATH_LIKE(clean_value):
                paths.append(_value_record(clean_value, key, line_number, line))

    return paths


@dataclass(slots=True)
class DotenvExtractor:
    """Concrete :class:`PathExtractor` for ``.env`` files."""

    name: str = "dotenv"

    def extract(self, content: str) -> list[ExtractedPath]:
        return extract_from_dotenv(content)


dotenv_extractor = DotenvExtractor()
registry.register_extractor(dotenv_extractor, categories=("dotenv",), replace=True)

__all__ = ["DotenvExtractor", "dotenv_extractor", "extract_from_dotenv"]
