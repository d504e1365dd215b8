"""Accounts and login sessions backed by the users/sessions tables."""

from __future__ import annotations

import asyncio
import logging
import re
import secrets
import uuid
from datetime import datetime, timedelta, timezone

import bcrypt
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from nasbox.config import settings
from nasbox.models.session import Session
from nasbox.models.user import User

logger = logging.getLogger(__name__)

# Usernames double as the top-level directory of each user's tree
USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_.-]{0,63}$")


class UserAlreadyExistsError(Exception):
    """Raised when registering a username that is taken."""


class InvalidUsernameError(Exception):
    """Raised when a username cannot be used as a namespace directory."""


class InvalidPasswordError(Exception):
    """Raised when a password is empty or exceeds bcrypt's 72-byte limit."""


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password to hash

    Returns:
        Bcrypt hash of the password
    """
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plain text password against a bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is malformed")
        return False


def _utcnow() -> datetime:
    # SQLite DateTime columns round-trip naive values
    return datetime.now(timezone.utc).replace(tzinfo=None)


def validate_username(username: str) -> str:
    if not USERNAME_PATTERN.match(username):
        raise InvalidUsernameError(f"Invalid username: {username!r}")
    return username


async def get_user(db: AsyncSession, username: str) -> User | None:
    result = await db.execute(select(User).where(User.username == username))
    return result.scalar_one_or_none()


async def create_user(db: AsyncSession, username: str, password: str) -> User:
    validate_username(username)
    if not password or len(password.encode("utf-8")) > 72:
        raise InvalidPasswordError("Password must be 1-72 bytes")
    if await get_user(db, username) is not None:
        raise UserAlreadyExistsError(username)

    user = User(
        id=str(uuid.uuid4()),
        username=username,
        password_hash=await asyncio.to_thread(hash_password, password),
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    logger.info("Created user %s", username)
    return user


async def authenticate(db: AsyncSession, username: str, password: str) -> User | None:
    """Return the user if the credentials match, else None."""
    user = await get_user(db, username)
    if user is None or not await asyncio.to_thread(verify_password, password, user.password_hash):
        logger.info("Failed login for %r", username)
        return None
    return user


async def create_session(db: AsyncSession, username: str) -> Session:
    now = _utcnow()
    session = Session(
        id=secrets.token_urlsafe(32),
        username=username,
        created_at=now,
        expires_at=now + timedelta(minutes=settings.session_expire_minutes),
    )
    db.add(session)
    await db.commit()
    return session


async def get_session_username(db: AsyncSession, token: str) -> str | None:
    """Username owning a live session token, or None. Expired rows are purged."""
    session = await db.get(Session, token)
    if session is None:
        return None
    if session.expires_at <= _utcnow():
        await db.delete(session)
        await db.commit()
        return None
    return session.username


async def revoke_session(db: AsyncSession, token: str) -> None:
    await db.execute(delete(Session).where(Session.id == token))
    await db.commit()
