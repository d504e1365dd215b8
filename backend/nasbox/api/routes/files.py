"""File API routes — browse and delete inside the user's tree.

Handlers are plain ``def`` so FastAPI runs the blocking filesystem calls
on its threadpool.
"""

from fastapi import APIRouter, Depends, Response

from nasbox.api.deps import get_file_service, get_requested_path, require_username
from nasbox.schemas.files import DirectoryListing, FileEntryOut
from nasbox.services.file_service import FileService

router = APIRouter()


@router.get("/info/{path:path}", response_model=FileEntryOut)
def file_info(
    username: str = Depends(require_username),
    rel_path: str = Depends(get_requested_path),
    file_service: FileService = Depends(get_file_service),
):
    """Metadata for a single file or directory."""
    return FileEntryOut.from_entry(file_service.get_entry(username, rel_path))


@router.get("/list", response_model=DirectoryListing)
@router.get("/list/{path:path}", response_model=DirectoryListing)
def list_directory(
    username: str = Depends(require_username),
    rel_path: str = Depends(get_requested_path),
    file_service: FileService = Depends(get_file_service),
):
    """Directory contents, directories first then by name."""
    listing = file_service.list_directory(username, rel_path)
    return DirectoryListing(
        path=listing.entry.relative_path,
        entry=FileEntryOut.from_entry(listing.entry),
        children=[FileEntryOut.from_entry(child) for child in listing.children],
    )


@router.delete("/delete/{path:path}")
def delete(
    username: str = Depends(require_username),
    rel_path: str = Depends(get_requested_path),
    file_service: FileService = Depends(get_file_service),
):
    """Delete a file, or a directory with everything below it."""
    file_service.delete(username, rel_path)
    return Response(status_code=200, media_type="text/html")
