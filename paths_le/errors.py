"""Structured error envelopes shared by extraction, validation, and resolution."""

from __future__ import annotations

import re
import time
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


class ErrorCategory(str, Enum):
    """Closed taxonomy of error sources."""

    PARSING = "parsing"
    FORMAT = "format"
    VALIDATION = "validation"
    FILE_SYSTEM = "file-system"
    CONFIGURATION = "configuration"
    PATH_VALIDATION = "path-validation"
    ANALYSIS = "analysis"
    PERFORMANCE = "performance"
    UNKNOWN = "unknown"


class ErrorSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class RecoveryAction(str, Enum):
    RETRY = "retry"
    FALLBACK = "fallback"
    USER_ACTION = "user-action"
    SKIP = "skip"
    ABORT = "abort"
    NONE = "none"


class ConfigurationError(ValueError):
    """Raised when a configuration file cannot be loaded or fails validation."""


def _now_ms() -> int:
    return int(time.time() * 1000)


def _freeze_metadata(metadata: Mapping[str, Any] | None) -> Mapping[str, Any] | None:
    if metadata is None:
        return None
    return MappingProxyType(dict(metadata))


@dataclass(frozen=True, slots=True)
class PathsLeError:
    """Categorised error record returned alongside results instead of raised."""

    category: ErrorCategory
    severity: ErrorSeverity
    message: str
    recoverable: bool
    recovery_action: RecoveryAction
    context: str | None = None
    timestamp: int = field(default_factory=_now_ms)
    stack: str | None = None
    metadata: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "metadata", _freeze_metadata(self.metadata))

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "category": self.category.value,
            "severity": self.severity.value,
            "message": self.message,
            "recoverable": self.recoverable,
            "recoveryAction": self.recovery_action.value,
            "timestamp": self.timestamp,
        }
        if self.context is not None:
            payload["context"] = self.context
        if self.stack is not None:
            payload["stack"] = self.stack
        if self.metadata is not None:
            payload["metadata"] = _plain(self.metadata)
        return payload


@dataclass(frozen=True, slots=True)
class ParseError(PathsLeError):
    """Error raised while turning document text into path records."""

    filepath: str | None = None
    position: tuple[int, int] | None = None

    def to_dict(self) -> dict[str, Any]:
        payload = PathsLeError.to_dict(self)
        if self.filepath is not None:
            payload["filepath"] = self.filepath
        if self.position is not None:
            line, column = self.position
            payload["position"] = {"line": line, "column": column}
        return payload


def _plain(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {str(key): _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    return value


def create_error(
    category: ErrorCategory,
    message: str,
    *,
    severity: ErrorSeverity = ErrorSeverity.ERROR,
    recoverable: bool | None = None,
    recovery_action: RecoveryAction | None = None,
    context: str | None = None,
    stack: str | None = None,
    metadata: Mapping[str, Any] | None = None,
) -> PathsLeError:
    """Build a :class:`PathsLeError` filling recovery defaults from the category."""

    default_recoverable, default_action = _CATEGORY_DEFAULTS.get(
        category, (False, RecoveryAction.NONE)
    )
    return PathsLeError(
        category=category,
        severity=severity,
        message=message,
        recoverable=default_recoverable if recoverable is None else recoverable,
        recovery_action=recovery_action or default_action,
        context=context,
        stack=stack,
        metadata=metadata,
    )


_CATEGORY_DEFAULTS: dict[ErrorCategory, tuple[bool, RecoveryAction]] = {
    ErrorCategory.PARSING: (True, RecoveryAction.SKIP),
    ErrorCategory.FORMAT: (False, RecoveryAction.NONE),
    ErrorCategory.VALIDATION: (True, RecoveryAction.SKIP),
    ErrorCategory.PATH_VALIDATION: (True, RecoveryAction.SKIP),
    ErrorCategory.FILE_SYSTEM: (True, RecoveryAction.FALLBACK),
    ErrorCategory.CONFIGURATION: (True, RecoveryAction.FALLBACK),
    ErrorCategory.ANALYSIS: (True, RecoveryAction.SKIP),
    ErrorCategory.PERFORMANCE: (False, RecoveryAction.USER_ACTION),
}


_SANITIZE_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"/Users/[^/]+/"), "/Users/***/"),
    (re.compile(r"/home/[^/]+/"), "/home/***/"),
    (re.compile(r"C:\\Users\\[^\\]+\\"), r"C:\\Users\\***\\"),
    (re.compile(r"password[=:]\s*\S+", re.IGNORECASE), "password=***"),
    (re.compile(r"token[=:]\s*\S+", re.IGNORECASE), "token=***"),
    (re.compile(r"key[=:]\s*\S+", re.IGNORECASE), "key=***"),
)


def sanitize_error_message(message: str) -> str:
    """Mask user names and credentials before a message is shown or logged."""

    sanitized = message
    for pattern, replacement in _SANITIZE_RULES:
        sanitized = pattern.sub(replacement, sanitized)
    return sanitized


__all__ = [
    "ConfigurationError",
    "ErrorCategory",
    "ErrorSeverity",
    "ParseError",
    "PathsLeError",
    "RecoveryAction",
    "create_error",
    "sanitize_error_message",
]
