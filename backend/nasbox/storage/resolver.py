"""Path confinement: every user-supplied path goes through PathResolver."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import PurePosixPath

from nasbox.storage.errors import InvalidPathError, OutsideRootError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StorageRoot:
    """Absolute directory that bounds every resolved path."""

    path: str

    def __post_init__(self) -> None:
        path = os.fspath(self.path)
        if "\x00" in path or not os.path.isabs(path):
            raise ValueError(f"Storage root must be an absolute path: {path!r}")
        object.__setattr__(self, "path", os.path.normpath(path))

    @property
    def parts(self) -> tuple[str, ...]:
        return PurePosixPath(self.path).parts

    def __str__(self) -> str:
        return self.path


@dataclass(frozen=True)
class RelativePath:
    """A path inside one user's namespace: ``<username>/<path>``."""

    username: str
    path: str = ""

    def __post_init__(self) -> None:
        name = self.username
        if not name or name in (".", "..") or "/" in name or "\x00" in name:
            raise InvalidPathError(self.path, f"invalid namespace {name!r}")

    def __str__(self) -> str:
        if not self.path:
            return self.username
        return f"{self.username}/{self.path}"


@dataclass(frozen=True)
class AbsolutePath:
    """Canonical absolute path known to lie inside ``root``."""

    root: StorageRoot
    path: str
    namespace: str | None = None

    @property
    def parts(self) -> tuple[str, ...]:
        return PurePosixPath(self.path).parts

    @property
    def relative(self) -> str:
        """Path relative to the storage root ('' for the root itself)."""
        return "/".join(self.parts[len(self.root.parts):])

    @property
    def display(self) -> str:
        """Path relative to the user's namespace, as the user addresses it."""
        parts = self.parts[len(self.root.parts):]
        if self.namespace is not None:
            parts = parts[1:]
        return "/".join(parts)

    @property
    def name(self) -> str:
        return os.path.basename(self.path)

    @property
    def is_namespace_root(self) -> bool:
        return self.namespace is not None and not self.display

    def __fspath__(self) -> str:
        return self.path

    def __str__(self) -> str:
        return self.path


class PathResolver:
    """Joins relative paths onto an injected StorageRoot and enforces confinement.

    Canonicalization is lexical (``os.path.normpath``); the check compares
    leading path components, so ``/data-secret`` never passes for ``/data``.
    """

    def __init__(self, root: StorageRoot):
        self._root = root

    @property
    def root(self) -> StorageRoot:
        return self._root

    def resolve(self, relative: RelativePath | str) -> AbsolutePath:
        text = str(relative)
        if "\x00" in text:
            raise InvalidPathError(text, "embedded NUL byte")

        canonical = os.path.normpath(os.path.join(self._root.path, text))
        parts = PurePosixPath(canonical).parts
        root_parts = self._root.parts

        if parts[: len(root_parts)] != root_parts:
            self._reject(text, canonical)

        namespace = None
        if isinstance(relative, RelativePath):
            namespace = relative.username
            if relative.path.startswith("/"):
                self._reject(text, os.path.normpath(relative.path))
            # alice/../bob must not reach another user's tree
            if parts[len(root_parts): len(root_parts) + 1] != (namespace,):
                self._reject(text, canonical)

        return AbsolutePath(root=self._root, path=canonical, namespace=namespace)

    def child(self, parent: AbsolutePath, name: str) -> AbsolutePath:
        """Resolve a directory entry name below an already-resolved parent."""
        if parent.namespace is None:
            return self.resolve(f"{parent.relative}/{name}" if parent.relative else name)
        display = f"{parent.display}/{name}" if parent.display else name
        return self.resolve(RelativePath(parent.namespace, display))

    @staticmethod
    def _reject(text: str, canonical: str) -> None:
        logger.warning("Path traversal blocked: %r resolved to %s", text, canonical)
        raise OutsideRootError(text, canonical)
