"""Canonical path resolution with a bounded, insertion-ordered cache."""

from __future__ import annotations

import json
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, replace
from functools import partial
from threading import Lock
from typing import Callable, Iterable, Sequence

from .paths import join_relative_path, normalize_path

logger = logging.getLogger(__name__)

RealpathCallable = Callable[[str], str]

DEFAULT_CACHE_LIMIT = 1000


@dataclass(frozen=True, slots=True)
class WorkspaceFolder:
    """A root directory that relative paths may be resolved against.

    ``scheme`` mirrors a URI scheme; anything other than ``file`` denotes a
    virtual or remote workspace where symlinks cannot be inspected.
    """

    root: str
    scheme: str = "file"

    @property
    def is_local(self) -> bool:
        return self.scheme == "file"


@dataclass(frozen=True, slots=True)
class PathResolutionOptions:
    resolve_symlinks: bool = False
    resolve_workspace_relative: bool = False
    workspace_folder: WorkspaceFolder | None = None

    @property
    def enabled(self) -> bool:
        return self.resolve_symlinks or self.resolve_workspace_relative

    def cache_key(self) -> str:
        folder = self.workspace_folder
        return json.dumps(
            {
                "resolveSymlinks": self.resolve_symlinks,
                "resolveWorkspaceRelative": self.resolve_workspace_relative,
                "workspaceFolder": None if folder is None else [folder.scheme, folder.root],
            },
            sort_keys=True,
        )


class ResolutionCache:
    """Thread-safe mapping that evicts the oldest insertion once ``limit`` is reached.

    Reads do not refresh an entry's position, so this is FIFO rather than LRU.
    """

    def __init__(self, limit: int = DEFAULT_CACHE_LIMIT) -> None:
        if limit < 1:
            raise ValueError("limit must be at least 1")
        self.limit = limit
        self._entries: dict[str, str] = {}
        self._lock = Lock()
        self._hits = 0
        self._misses = 0

    def get(self, key: str) -> str | None:
        with self._lock:
            value = self._entries.get(key)
            if value is None:
                self._misses += 1
            else:
                self._hits += 1
            return value

    def put(self, key: str, value: str) -> None:
        with self._lock:
            if key not in self._entries and len(self._entries) >= self.limit:
                oldest = next(iter(self._entries))
                del self._entries[oldest]
            self._entries[key] = value

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0

    @property
    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    def __len__(self) -> int:
        return self.size

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def stats(self) -> dict[str, int]:
        with self._lock:
            return {
                "size": len(self._entries),
                "limit": self.limit,
                "hits": self._hits,
                "misses": self._misses,
            }


class PathResolver:
    """Resolve path strings to canonical form, memoising results.

    ``realpath`` is the filesystem primitive used for symlink resolution and
    defaults to a strict :func:`os.path.realpath`; tests inject a fake.
    """

    def __init__(
        self,
        cache: ResolutionCache | None = None,
        realpath: RealpathCallable | None = None,
    ) -> None:
        self.cache = cache if cache is not None else ResolutionCache()
        self._realpath: RealpathCallable = realpath or partial(os.path.realpath, strict=True)

    def resolve(self, path: str, options: PathResolutionOptions) -> str:
        if not path or not path.strip():
            return path

        cache_key = f"{path}:{options.cache_key()}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached

        try:
            resolved = normalize_path(path)
            folder = options.workspace_folder
            if options.resolve_workspace_relative and folder is not None:
                resolved = self._resolve_workspace_relative(resolved, folder)
            if options.resolve_symlinks:
                resolved = self._resolve_symlinks(resolved, folder)
        except (OSError, ValueError) as exc:
            logger.debug("Resolution of %r failed, using normalized form: %s", path, exc)
            resolved = normalize_path(path)

        self.cache.put(cache_key, resolved)
        return resolved

    def safe_resolve(self, path: str, options: PathResolutionOptions) -> str:
        """Resolve ``path`` but never raise; fall back to plain normalisation."""

        if not options.enabled:
            return normalize_path(path)
        try:
            return self.resolve(path, options)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Canonical path resolution failed, using default mode: %s", exc)
            return normalize_path(path)

    def resolve_many(
        self,
        paths: Sequence[str],
        options: PathResolutionOptions,
        *,
        max_workers: int | None = None,
    ) -> list[str]:
        """Resolve a batch concurrently, returning results in input order."""

        if len(paths) <= 1:
            return [self.safe_resolve(path, options) for path in paths]
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            return list(executor.map(lambda item: self.safe_resolve(item, options), paths))

    def clear_cache(self) -> None:
        self.cache.clear()

    @staticmethod
    def _resolve_workspace_relative(path: str, folder: WorkspaceFolder) -> str:
        if os.path.isabs(path):
            return path
        return os.path.normpath(os.path.join(os.path.abspath(folder.root), path))

    def _resolve_symlinks(self, path: str, folder: WorkspaceFolder | None) -> str:
        if folder is not None and not folder.is_local:
            return path
        try:
            return self._realpath(path)
        except FileNotFoundError:
            logger.debug("Path %r does not exist; keeping unresolved value", path)
        except PermissionError:
            logger.debug("Permission denied resolving %r; keeping unresolved value", path)
        except OSError as exc:
            logger.debug("Could not resolve symlinks for %r: %s", path, exc)
        return path


def get_workspace_folder_for_path(
    path: str,
    folders: Sequence[WorkspaceFolder],
) -> WorkspaceFolder | None:
    """Pick the workspace folder owning ``path``.

    A single folder is always returned. With several, the innermost folder
    whose root contains the (absolutised) path wins.
    """

    if not folders:
        return None
    if len(folders) == 1:
        return folders[0]

    target = path if os.path.isabs(path) else os.path.abspath(path)
    best: WorkspaceFolder | None = None
    best_length = -1
    for folder in folders:
        root = os.path.abspath(folder.root)
        try:
            contains = os.path.commonpath([root, target]) == root
        except ValueError:
            # Different drives on Windows.
            continue
        if contains and len(root) > best_length:
            best, best_length = folder, len(root)
    return best


def resolve_path_canonical(
    path: str,
    options: PathResolutionOptions | None = None,
    *,
    resolver: PathResolver,
    workspace_folders: Iterable[WorkspaceFolder] = (),
) -> str:
    """Resolve ``path`` with both symlink and workspace resolution on by default."""

    effective = options or PathResolutionOptions(resolve_symlinks=True, resolve_workspace_relative=True)
    if effective.workspace_folder is None:
        folder = get_workspace_folder_for_path(path, tuple(workspace_folders))
        if folder is not None:
            effective = replace(effective, workspace_folder=folder)
    return resolver.safe_resolve(path, effective)


def resolve_path_enhanced(
    base_path: str,
    relative_path: str,
    options: PathResolutionOptions | None = None,
    *,
    resolver: PathResolver,
    workspace_folders: Iterable[WorkspaceFolder] = (),
) -> str:
    """Join ``relative_path`` onto ``base_path``'s directory, then canonicalise."""

    joined = join_relative_path(base_path, relative_path)
    if options is not None and not options.enabled:
        return joined
    return resolve_path_canonical(
        joined,
        options,
        resolver=resolver,
        workspace_folders=workspace_folders,
    )


__all__ = [
    "DEFAULT_CACHE_LIMIT",
    "PathResolutionOptions",
    "PathResolver",
    "ResolutionCache",
    "WorkspaceFolder",
    "get_workspace_folder_for_path",
    "resolve_path_canonical",
    "resolve_path_enhanced",
]
