"""SQLAlchemy ORM models for NASBox."""

from nasbox.models.base import Base
from nasbox.models.session import Session
from nasbox.models.user import User

__all__ = [
    "Base",
    "Session",
    "User",
]
