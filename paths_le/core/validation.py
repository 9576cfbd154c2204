"""Batch validation of path strings."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Iterable, Protocol

from paths_le.config import ValidationConfig
from paths_le.extraction.base import PathType

from .models import ValidationResult, ValidationStatus
from .paths import detect_path_type, validate_path_format
from .resolver import PathResolutionOptions, PathResolver

logger = logging.getLogger(__name__)


class FilesystemProbe(Protocol):
    """Filesystem capability used for existence and permission checks."""

    def exists(self, path: str) -> bool:
        ...

    def permissions(self, path: str) -> str:
        """Return ``read-write``, ``read-only`` or ``no-access``."""
        ...


def validate_paths(
    paths: Iterable[str],
    config: ValidationConfig,
    *,
    probe: FilesystemProbe | None = None,
    resolver: PathResolver | None = None,
    resolution: PathResolutionOptions | None = None,
    should_stop: Callable[[int], bool] | None = None,
) -> list[ValidationResult]:
    """Validate every path, continuing past per-path failures.

    Filesystem checks only happen when ``config.check_existence`` is set and
    a ``probe`` is supplied; otherwise syntactically valid paths are reported
    as ``valid`` with ``read-write`` permissions.

    ``should_stop`` is called with the number of paths validated so far before
    each path; returning True ends the batch early.
    """

    results: list[ValidationResult] = []
    for path in paths:
        if should_stop is not None and should_stop(len(results)):
            logger.debug("Validation stopped after %d paths", len(results))
            break
        try:
            result = _validate_single_path(path, config, probe)
            if config.resolve_canonical and resolver is not None and result.is_valid:
                options = resolution or PathResolutionOptions(
                    resolve_symlinks=True, resolve_workspace_relative=True
                )
                result = replace(result, resolved_path=resolver.safe_resolve(path, options))
        except Exception as exc:  # noqa: BLE001
            logger.debug("Validation of %r raised", path, exc_info=True)
            result = ValidationResult(
                path=path,
                status=ValidationStatus.INVALID,
                error=str(exc) or "Unknown error",
            )
        results.append(result)
    return results


def _validate_single_path(
    path: str,
    config: ValidationConfig,
    probe: FilesystemProbe | None,
) -> ValidationResult:
    format_check = validate_path_format(path)
    if not format_check.is_valid:
        return ValidationResult(
            path=path,
            status=ValidationStatus.INVALID,
            error=", ".join(format_check.errors),
        )

    if detect_path_type(path) is PathType.URL:
        return ValidationResult(path=path, status=ValidationStatus.VALID, exists=True)

    if not config.check_existence or probe is None:
        return ValidationResult(
            path=path,
            status=ValidationStatus.VALID,
            exists=True,
            permissions="read-write",
        )

    if not probe.exists(path):
        return ValidationResult(
            path=path,
            status=ValidationStatus.BROKEN,
            exists=False,
            error="Path does not exist",
        )

    if not config.check_permissions:
        return ValidationResult(path=path, status=ValidationStatus.VALID, exists=True)

    permissions = probe.permissions(path)
    status = ValidationStatus.INACCESSIBLE if permissions == "no-access" else ValidationStatus.VALID
    return ValidationResult(path=path, status=status, exists=True, permissions=permissions)


__all__ = ["FilesystemProbe", "validate_paths"]
