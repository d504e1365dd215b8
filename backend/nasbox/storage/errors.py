"""Storage error taxonomy raised by the path and file layer."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from nasbox.storage.resolver import AbsolutePath


class StorageError(Exception):
    """Base class for all path, classification and delete errors."""

    @property
    def display_path(self) -> str | None:
        """Path safe to echo back to the user, or None if nothing may be shown."""
        return None


class DecodeError(StorageError):
    """Requested path is not valid percent-encoded UTF-8."""

    def __init__(self, raw: str):
        self.raw = raw
        super().__init__(f"Invalid percent-encoded UTF-8 in path: {raw!r}")

    @property
    def display_path(self) -> str | None:
        return self.raw


class ResolveError(StorageError):
    """Relative path could not be turned into a confined absolute path."""


class OutsideRootError(ResolveError):
    """Resolved path escapes the storage root (or the user's namespace)."""

    def __init__(self, relative: str, resolved: str):
        self.relative = relative
        self.resolved = resolved
        super().__init__(f"Path {relative!r} resolves outside the storage root")


class InvalidPathError(ResolveError):
    """Path is syntactically unusable (NUL bytes, bad namespace, ...)."""

    def __init__(self, relative: str, reason: str):
        self.relative = relative
        self.reason = reason
        super().__init__(f"Invalid path {relative!r}: {reason}")

    @property
    def display_path(self) -> str | None:
        return self.relative.replace("\x00", "")


class StorageIOError(StorageError):
    """Metadata probe failed."""

    def __init__(self, path: AbsolutePath, message: str = "I/O error"):
        self.path = path
        super().__init__(f"{message}: {path.relative}")

    @property
    def display_path(self) -> str | None:
        return self.path.display


class NotFoundError(StorageIOError):
    def __init__(self, path: AbsolutePath):
        super().__init__(path, "No such file or directory")


class DeleteError(StorageError):
    """Removal did not succeed."""

    def __init__(self, path: AbsolutePath, message: str):
        self.path = path
        super().__init__(f"{message}: {path.relative}")

    @property
    def display_path(self) -> str | None:
        return self.path.display


class TypeMismatchError(DeleteError):
    """Node type changed between classification and removal."""

    def __init__(self, path: AbsolutePath, expected: str):
        self.expected = expected
        super().__init__(path, f"Node is no longer a {expected}")


class DeleteFailedError(DeleteError):
    def __init__(self, path: AbsolutePath):
        super().__init__(path, "Unable to delete")
