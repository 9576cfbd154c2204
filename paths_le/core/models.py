"""Value objects returned by batch validation and analysis."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from paths_le.extraction.base import PathType


class ValidationStatus(str, Enum):
    VALID = "valid"
    INVALID = "invalid"
    BROKEN = "broken"
    INACCESSIBLE = "inaccessible"


PERMISSION_LABELS = ("read-write", "read-only", "no-access")


def _frozen_counts(counts: Mapping[str, int]) -> Mapping[str, int]:
    return MappingProxyType(dict(counts))


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of validating a single path string."""

    path: str
    status: ValidationStatus
    exists: bool | None = None
    permissions: str | None = None
    error: str | None = None
    resolved_path: str | None = None

    @property
    def is_valid(self) -> bool:
        return self.status is ValidationStatus.VALID

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"path": self.path, "status": self.status.value}
        if self.exists is not None:
            payload["exists"] = self.exists
        if self.permissions is not None:
            payload["permissions"] = self.permissions
        if self.error is not None:
            payload["error"] = self.error
        if self.resolved_path is not None:
            payload["resolvedPath"] = self.resolved_path
        return payload


@dataclass(frozen=True, slots=True)
class ValidationAnalysis:
    valid: int
    invalid: int
    broken: int
    inaccessible: int
    permissions: Mapping[str, int]

    def __post_init__(self) -> None:
        object.__setattr__(self, "permissions", _frozen_counts(self.permissions))

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "invalid": self.invalid,
            "broken": self.broken,
            "inaccessible": self.inaccessible,
            "permissions": dict(self.permissions),
        }


@dataclass(frozen=True, slots=True)
class CommonPattern:
    """A structural path shape and how often it occurred."""

    pattern: str
    count: int
    percentage: float
    examples: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "pattern": self.pattern,
            "count": self.count,
            "percentage": self.percentage,
            "examples": list(self.examples),
        }


@dataclass(frozen=True, slots=True)
class PatternAnalysis:
    common_patterns: tuple[CommonPattern, ...]
    depth_distribution: Mapping[str, int]
    naming_conventions: Mapping[str, int]
    extensions: Mapping[str, int]

    def __post_init__(self) -> None:
        object.__setattr__(self, "common_patterns", tuple(self.common_patterns))
        object.__setattr__(self, "depth_distribution", _frozen_counts(self.depth_distribution))
        object.__setattr__(self, "naming_conventions", _frozen_counts(self.naming_conventions))
        object.__setattr__(self, "extensions", _frozen_counts(self.extensions))

    def to_dict(self) -> dict[str, Any]:
        return {
            "commonPatterns": [pattern.to_dict() for pattern in self.common_patterns],
            "depthDistribution": dict(self.depth_distribution),
            "namingConventions": dict(self.naming_conventions),
            "extensions": dict(self.extensions),
        }


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    """Aggregate statistics over a batch of path strings."""

    count: int
    unique: int
    duplicates: int
    types: Mapping[PathType, int] = field(default_factory=dict)
    validation: ValidationAnalysis | None = None
    patterns: PatternAnalysis | None = None

    def __post_init__(self) -> None:
        histogram = {path_type: 0 for path_type in PathType}
        histogram.update(self.types)
        object.__setattr__(self, "types", MappingProxyType(histogram))

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "count": self.count,
            "unique": self.unique,
            "duplicates": self.duplicates,
            "types": {path_type.value: total for path_type, total in self.types.items()},
        }
        if self.validation is not None:
            payload["validation"] = self.validation.to_dict()
        if self.patterns is not None:
            payload["patterns"] = self.patterns.to_dict()
        return payload


__all__ = [
    "AnalysisResult",
    "CommonPattern",
    "PERMISSION_LABELS",
    "PatternAnalysis",
    "ValidationAnalysis",
    "ValidationResult",
    "ValidationStatus",
]
