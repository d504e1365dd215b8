"""Auth routes — session cookie login/logout against the local user store."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from nasbox.api.deps import get_file_service, require_username
from nasbox.config import settings
from nasbox.database import get_db
from nasbox.schemas.auth import LoginRequest, UserInfo
from nasbox.services import auth_service
from nasbox.services.file_service import FileService

logger = logging.getLogger(__name__)
router = APIRouter()


def _set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        settings.session_cookie_name,
        token,
        max_age=settings.session_expire_minutes * 60,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )


@router.post("/login", response_model=UserInfo)
async def login(body: LoginRequest, response: Response, db: AsyncSession = Depends(get_db)):
    """Check credentials and start a session."""
    user = await auth_service.authenticate(db, body.username, body.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    session = await auth_service.create_session(db, user.username)
    _set_session_cookie(response, session.id)
    logger.info("User %s logged in", user.username)
    return UserInfo(username=user.username)


@router.post("/logout")
async def logout(request: Request, response: Response, db: AsyncSession = Depends(get_db)):
    """End the current session; a no-op without one."""
    token = request.cookies.get(settings.session_cookie_name)
    if token:
        await auth_service.revoke_session(db, token)
    response.delete_cookie(settings.session_cookie_name)
    return {"status": "ok"}


@router.post("/register", response_model=UserInfo, status_code=status.HTTP_201_CREATED)
async def register(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db),
    file_service: FileService = Depends(get_file_service),
):
    """Create an account and its home directory (disabled by default)."""
    if not settings.allow_registration:
        raise HTTPException(status.HTTP_403_FORBIDDEN, "Registration is disabled")

    try:
        user = await auth_service.create_user(db, body.username, body.password)
    except auth_service.UserAlreadyExistsError:
        raise HTTPException(status.HTTP_409_CONFLICT, "Username already taken")
    except (auth_service.InvalidUsernameError, auth_service.InvalidPasswordError) as exc:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, str(exc))

    file_service.ensure_home(user.username)
    return UserInfo(username=user.username)


@router.get("/me", response_model=UserInfo)
async def me(username: str = Depends(require_username)):
    return UserInfo(username=username)
