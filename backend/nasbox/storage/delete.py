"""Irreversible removal of a classified path."""

from __future__ import annotations

import logging
import os
import shutil

from nasbox.storage.classifier import FileCategory
from nasbox.storage.errors import DeleteFailedError, TypeMismatchError
from nasbox.storage.resolver import AbsolutePath

logger = logging.getLogger(__name__)


def delete_path(path: AbsolutePath, category: FileCategory) -> None:
    """Remove ``path`` according to its already-determined category.

    Directories are removed recursively, everything else as a single node.
    The node is not stat'ed again: if the removal primitive finds a
    different node type, TypeMismatchError is raised and nothing else is
    attempted. Other OS errors become DeleteFailedError; the OS message is
    only logged.
    """
    if category is FileCategory.DIRECTORY:
        expected = "directory"
        remove = shutil.rmtree
        mismatch: type[OSError] = NotADirectoryError
    else:
        expected = "file"
        remove = os.remove
        mismatch = IsADirectoryError

    try:
        remove(path.path)
    except mismatch as exc:
        logger.error("Possible race deleting %s: expected a %s (%s)", path.path, expected, exc)
        raise TypeMismatchError(path, expected) from exc
    except OSError as exc:
        logger.error("Failed to delete %s: %s", path.path, exc)
        raise DeleteFailedError(path) from exc

    logger.info("Deleted %s %s", expected, path.path)
