"""FastAPI dependency injection — session auth, file service, requested path."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from nasbox import services
from nasbox.api.errors import LoginRequired
from nasbox.config import settings
from nasbox.database import get_db
from nasbox.services import auth_service
from nasbox.services.file_service import FileService
from nasbox.storage import InvalidPathError, decode_path, strip_trailing_separator

logger = logging.getLogger(__name__)


async def get_current_username(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> Optional[str]:
    """Username of the session cookie's owner, or None if not logged in."""
    token = request.cookies.get(settings.session_cookie_name)
    if not token:
        return None
    return await auth_service.get_session_username(db, token)


async def require_username(
    username: Optional[str] = Depends(get_current_username),
) -> str:
    """Short-circuit with the auth page before any path handling."""
    if username is None:
        raise LoginRequired()
    return username


def get_file_service() -> FileService:
    return services.get_file_service()


def get_requested_path(request: Request) -> str:
    """Decoded ``{path}`` tail of the matched route, without trailing '/'.

    Decodes the raw request path itself so malformed UTF-8 is rejected
    rather than replaced by the server's lossy decoding. Only the tail
    after the route's literal prefix is decoded.
    """
    tail = request.path_params.get("path")
    if tail is None:
        return ""

    raw_path = request.scope.get("raw_path")
    if raw_path is None:
        return strip_trailing_separator(tail)

    # The matched prefix is literal route text, so it is the same raw or decoded
    path = request.scope["path"]
    prefix = path[: len(path) - len(tail)]
    root_path = request.scope.get("root_path", "")
    candidates = [prefix, root_path + prefix]
    if root_path and prefix.startswith(root_path):
        candidates.append(prefix[len(root_path):])

    raw = raw_path.split(b"?", 1)[0]
    for candidate in candidates:
        head = candidate.encode("utf-8")
        if raw.startswith(head):
            return strip_trailing_separator(decode_path(raw[len(head):]))

    raise InvalidPathError(tail, "path does not match route")
