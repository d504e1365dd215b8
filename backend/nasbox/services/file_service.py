"""File operations scoped to one user's namespace under the storage root."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

from nasbox.storage import (
    AbsolutePath,
    FileCategory,
    FileEntry,
    InvalidPathError,
    NotFoundError,
    PathResolver,
    RelativePath,
    StorageIOError,
    classify,
    decode_path,
    delete_path,
    strip_trailing_separator,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DirectoryListing:
    entry: FileEntry
    children: list[FileEntry] = field(default_factory=list)


class FileService:
    """Composes decode -> resolve -> classify -> entry/listing/delete.

    Holds no per-request state; safe to share between concurrent requests.
    """

    def __init__(self, resolver: PathResolver):
        self._resolver = resolver

    @property
    def resolver(self) -> PathResolver:
        return self._resolver

    def resolve(self, username: str, path: str) -> AbsolutePath:
        """Resolve an already-decoded user path."""
        return self._resolver.resolve(RelativePath(username, strip_trailing_separator(path)))

    def resolve_raw(self, username: str, raw_segment: str | bytes) -> AbsolutePath:
        """Resolve a still percent-encoded path segment."""
        return self.resolve(username, decode_path(raw_segment))

    def get_entry(self, username: str, path: str) -> FileEntry:
        return FileEntry.build(self.resolve(username, path))

    def list_directory(self, username: str, path: str) -> DirectoryListing:
        target = self.resolve(username, path)
        entry = FileEntry.build(target)
        if not entry.is_directory:
            return DirectoryListing(entry=entry)

        children: list[FileEntry] = []
        try:
            with os.scandir(target.path) as it:
                names = [e.name for e in it]
        except (FileNotFoundError, NotADirectoryError) as exc:
            raise NotFoundError(target) from exc
        except OSError as exc:
            logger.error("Cannot read directory %s: %s", target.path, exc)
            raise StorageIOError(target) from exc

        for name in names:
            try:
                children.append(FileEntry.build(self._resolver.child(target, name)))
            except NotFoundError:
                logger.debug("Entry vanished during listing: %s/%s", target.path, name)

        children.sort()
        return DirectoryListing(entry=entry, children=children)

    def delete(self, username: str, path: str) -> FileCategory:
        """Classify and delete ``path``; returns the category that was removed."""
        target = self.resolve(username, path)
        if target.is_namespace_root:
            raise InvalidPathError(path, "refusing to delete the home directory")
        category = classify(target).category
        delete_path(target, category)
        return category

    def ensure_home(self, username: str) -> AbsolutePath:
        """Create the user's namespace directory if missing."""
        home = self._resolver.resolve(RelativePath(username))
        os.makedirs(home.path, exist_ok=True)
        return home
