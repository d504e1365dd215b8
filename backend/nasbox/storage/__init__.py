"""Path confinement and file model."""

from nasbox.storage.classifier import Classification, FileCategory, classify
from nasbox.storage.codec import decode_path, strip_trailing_separator
from nasbox.storage.delete import delete_path
from nasbox.storage.entry import FileEntry
from nasbox.storage.errors import (
    DecodeError,
    DeleteError,
    DeleteFailedError,
    InvalidPathError,
    NotFoundError,
    OutsideRootError,
    ResolveError,
    StorageError,
    StorageIOError,
    TypeMismatchError,
)
from nasbox.storage.resolver import AbsolutePath, PathResolver, RelativePath, StorageRoot

__all__ = [
    "AbsolutePath",
    "Classification",
    "DecodeError",
    "DeleteError",
    "DeleteFailedError",
    "FileCategory",
    "FileEntry",
    "InvalidPathError",
    "NotFoundError",
    "OutsideRootError",
    "PathResolver",
    "RelativePath",
    "ResolveError",
    "StorageError",
    "StorageIOError",
    "StorageRoot",
    "TypeMismatchError",
    "classify",
    "decode_path",
    "delete_path",
    "strip_trailing_separator",
]
