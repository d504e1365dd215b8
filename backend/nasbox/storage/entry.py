"""Immutable snapshot of one filesystem node, ordered for listings."""

from __future__ import annotations

from dataclasses import dataclass

from nasbox.storage.classifier import FileCategory, classify
from nasbox.storage.resolver import AbsolutePath


@dataclass(frozen=True, eq=False)
class FileEntry:
    """Point-in-time description of a file or directory.

    Equality and hashing use ``absolute_path``. Ordering puts directories
    first, then compares ``name`` by code point; entries with the same
    name and directory-ness are neither less nor greater than each other
    even when their paths differ.
    """

    name: str
    relative_path: str
    absolute_path: str
    category: FileCategory
    extension: str
    size_bytes: int

    @classmethod
    def build(cls, path: AbsolutePath) -> FileEntry:
        category, extension, size_bytes = classify(path)
        return cls(
            name=path.name,
            relative_path=path.display,
            absolute_path=path.path,
            category=category,
            extension=extension,
            size_bytes=size_bytes,
        )

    @property
    def is_directory(self) -> bool:
        return self.category is FileCategory.DIRECTORY

    @property
    def sort_key(self) -> tuple[bool, str]:
        return (not self.is_directory, self.name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FileEntry):
            return NotImplemented
        return self.absolute_path == other.absolute_path

    def __hash__(self) -> int:
        return hash(self.absolute_path)

    def __lt__(self, other: FileEntry) -> bool:
        if not isinstance(other, FileEntry):
            return NotImplemented
        return self.sort_key < other.sort_key

    def __le__(self, other: FileEntry) -> bool:
        if not isinstance(other, FileEntry):
            return NotImplemented
        return self.sort_key <= other.sort_key

    def __gt__(self, other: FileEntry) -> bool:
        if not isinstance(other, FileEntry):
            return NotImplemented
        return self.sort_key > other.sort_key

    def __ge__(self, other: FileEntry) -> bool:
        if not isinstance(other, FileEntry):
            return NotImplemented
        return self.sort_key >= other.sort_key
