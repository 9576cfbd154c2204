"""Core extraction interfaces and data models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Protocol

from paths_le.errors import ParseError


class PathType(str, Enum):
    """Shape assigned to an extracted path at extraction time."""

    FILE = "file"
    DIRECTORY = "directory"
    RELATIVE = "relative"
    ABSOLUTE = "absolute"
    URL = "url"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class SourcePosition:
    """1-based location of a match in the source document."""

    line: int
    column: int


DOCUMENT_START = SourcePosition(line=1, column=1)


@dataclass(frozen=True, slots=True)
class ExtractedPath:
    """One path-like occurrence found in a document."""

    value: str
    type: PathType
    position: SourcePosition
    context: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "value": self.value,
            "type": self.type.value,
            "position": {"line": self.position.line, "column": self.position.column},
            "context": self.context,
        }


@dataclass(frozen=True, slots=True)
class ExtractionResult:
    """Uniform result-or-error envelope returned by the dispatcher."""

    paths: tuple[ExtractedPath, ...] = ()
    errors: tuple[ParseError, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "paths", tuple(self.paths))
        object.__setattr__(self, "errors", tuple(self.errors))

    @property
    def success(self) -> bool:
        return not self.errors

    @classmethod
    def from_iterables(
        cls,
        paths: Iterable[ExtractedPath],
        errors: Iterable[ParseError] = (),
    ) -> "ExtractionResult":
        return cls(paths=tuple(paths), errors=tuple(errors))

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "paths": [path.to_dict() for path in self.paths],
            "errors": [error.to_dict() for error in self.errors],
        }


class PathExtractor(Protocol):
    """Contract shared by all concrete format extractors."""

    @property
    def name(self) -> str:
        ...

    def extract(self, content: str) -> list[ExtractedPath]:
        ...


__all__ = [
    "DOCUMENT_START",
    "ExtractedPath",
    "ExtractionResult",
    "PathExtractor",
    "PathType",
    "SourcePosition",
]
