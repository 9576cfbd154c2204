"""JavaScript/TypeScript extractor for import, require, and export specifiers.

The scan runs over raw source text, so string escapes are not evaluated:
``require('C:\\\\lib\\\\a.js')`` yields the doubled backslashes as written.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from ..base import ExtractedPath, SourcePosition
from ..classify import MODULE_RULES, classify
from ..registry import registry

_STATEMENT_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"""import\s+(?:[\w{},\s*]+\s+from\s+)?['"]([^'"]+)['"]"""),
    re.compile(r"""import\s*\(\s*['"]([^'"]+)['"]\s*\)"""),
    re.compile(r"""require\s*\(\s*['"]([^'"]+)['"]\s*\)"""),
    re.compile(r"""export\s+(?:[\w{},\s*]+\s+from\s+)?['"]([^'"]+)['"]"""),
)

_WINDOWS_DRIVE_PATTERN = re.compile(r"[A-Za-z]:[/\\]")
_MODULE_PREFIXES = ("./", "../", "/", "http://", "https://", "file://")


def is_module_path(value: str) -> bool:
    """Return ``True`` for file specifiers; bare package names like ``react`` are rejected."""

    if not value or len(value) < 2:
        return False
    if value.startswith(_MODULE_PREFIXES):
        return True
    return bool(_WINDOWS_DRIVE_PATTERN.match(value))


def statement_kind(statement: str) -> str:
    if "require" in statement:
        return "require"
    if "export" in statement:
        return "export"
    if "import(" in statement:
        return "dynamic import"
    return "import"


def extract_from_javascript(content: str) -> list[ExtractedPath]:
    if not content.strip():
        return []

    paths: list[ExtractedPath] = []
    for line_number, line in enumerate(content.split("\n"), start=1):
        if not line:
            continue
        for pattern in _STATEMENT_PATTERNS:
            for match in pattern.finditer(line):
                specifier = match.group(1)
                if not is_module_path(specifier):
                    continue
                paths.append(
                    ExtractedPath(
                        value=specifier,
                        type=classify(specifier, MODULE_RULES),
                        position=SourcePosition(line=line_number, column=match.start() + 1),
                        context=f"JS {statement_kind(match.group(0))}",
                    )
                )
    return paths


@dataclass(slots=True)
class JavaScriptExtractor:
    """Concrete :class:`PathExtractor` shared by JavaScript and TypeScript sources."""

    name: str = "javascript"

    def extract(self, content: str) -> list[ExtractedPath]:
        return extract_from_javascript(content)


javascript_extractor = JavaScriptExtractor()
registry.register_extractor(
    javascript_extractor,
    categories=("javascript", "typescript"),
    replace=True,
)

__all__ = [
    "JavaScriptExtractor",
    "extract_from_javascript",
    "is_module_path",
    "javascript_extractor",
    "statement_kind",
]
