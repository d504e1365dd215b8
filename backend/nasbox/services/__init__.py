"""Business logic services and their singleton registry."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from nasbox.config import settings

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from nasbox.services.file_service import FileService

logger = logging.getLogger(__name__)

_file_service: FileService | None = None


async def init_services(db_session: AsyncSession) -> None:
    """Create the FileService for the configured root and seed the admin account."""
    global _file_service

    from nasbox.services import auth_service
    from nasbox.services.file_service import FileService
    from nasbox.storage import PathResolver, StorageRoot

    _file_service = FileService(PathResolver(StorageRoot(settings.fs_root)))
    logger.info("Storage root: %s", settings.fs_root)

    if settings.admin_username and not settings.admin_password:
        logger.warning(
            "NASBOX_ADMIN_USERNAME set without NASBOX_ADMIN_PASSWORD; skipping bootstrap account"
        )
    elif settings.admin_username:
        if await auth_service.get_user(db_session, settings.admin_username) is None:
            await auth_service.create_user(
                db_session, settings.admin_username, settings.admin_password
            )
        _file_service.ensure_home(settings.admin_username)
    else:
        logger.warning(
            "No bootstrap account configured (NASBOX_ADMIN_USERNAME); "
            "log in with an existing user"
        )


async def shutdown_services() -> None:
    global _file_service
    _file_service = None


def get_file_service() -> FileService:
    if _file_service is None:
        raise RuntimeError("Services not initialized, call init_services() first")
    return _file_service
