"""File categorization from a single metadata probe."""

from __future__ import annotations

import logging
import os
import stat
from enum import Enum
from typing import NamedTuple

from nasbox.storage.errors import NotFoundError, StorageIOError
from nasbox.storage.resolver import AbsolutePath

logger = logging.getLogger(__name__)


class FileCategory(str, Enum):
    DIRECTORY = "Directory"
    AUDIO = "Audio"
    VIDEO = "Video"
    STREAM_PLAYLIST = "StreamPlaylist"
    STREAM_SEGMENT = "StreamSegment"
    DOCUMENT = "Document"
    IMAGE = "Image"
    UNKNOWN = "Unknown"


# Case-sensitive: "MP4" is Unknown
EXTENSION_CATEGORIES: dict[str, FileCategory] = {
    "mp3": FileCategory.AUDIO,
    "avi": FileCategory.VIDEO,
    "mkv": FileCategory.VIDEO,
    "mp4": FileCategory.VIDEO,
    "m3u8": FileCategory.STREAM_PLAYLIST,
    "ts": FileCategory.STREAM_SEGMENT,
    "pdf": FileCategory.DOCUMENT,
    "txt": FileCategory.DOCUMENT,
    "png": FileCategory.IMAGE,
    "jpg": FileCategory.IMAGE,
    "jpeg": FileCategory.IMAGE,
    "webp": FileCategory.IMAGE,
}


class Classification(NamedTuple):
    category: FileCategory
    extension: str
    size_bytes: int


def extension_of(name: str) -> str:
    """Text after the final '.' of a base name, or '' if there is none."""
    _, dot, ext = name.rpartition(".")
    return ext if dot else ""


def category_for_extension(extension: str) -> FileCategory:
    return EXTENSION_CATEGORIES.get(extension, FileCategory.UNKNOWN)


def classify(path: AbsolutePath) -> Classification:
    """Stat ``path`` once and derive its category, extension and size."""
    try:
        st = os.stat(path.path)
    except FileNotFoundError as exc:
        if not os.path.islink(path.path):
            raise NotFoundError(path) from exc
        # Dangling symlink: the link itself is the node
        return Classification(FileCategory.UNKNOWN, extension_of(path.name), 0)
    except NotADirectoryError as exc:
        raise NotFoundError(path) from exc
    except OSError as exc:
        logger.error("Metadata probe failed for %s: %s", path.path, exc)
        raise StorageIOError(path) from exc

    if stat.S_ISDIR(st.st_mode):
        return Classification(FileCategory.DIRECTORY, "", 0)

    extension = extension_of(path.name)
    return Classification(category_for_extension(extension), extension, st.st_size)
