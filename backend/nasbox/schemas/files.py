"""File schemas — listing and entry payloads."""

from pydantic import BaseModel

from nasbox.storage import FileCategory, FileEntry


class FileEntryOut(BaseModel):
    """One file or directory; the absolute path is never exposed."""
    name: str
    relative_path: str
    category: FileCategory
    extension: str
    size_bytes: int
    is_directory: bool

    @classmethod
    def from_entry(cls, entry: FileEntry) -> "FileEntryOut":
        return cls(
            name=entry.name,
            relative_path=entry.relative_path,
            category=entry.category,
            extension=entry.extension,
            size_bytes=entry.size_bytes,
            is_directory=entry.is_directory,
        )


class DirectoryListing(BaseModel):
    path: str
    entry: FileEntryOut
    children: list[FileEntryOut] = []
