"""NASBox configuration — Pydantic BaseSettings loaded from .env."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    app_name: str = "NASBox"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # Network
    host: str = "127.0.0.1"
    port: int = 8000
    api_prefix: str = "/api"
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:8000",
    ]

    # Every user-visible path resolves inside this directory
    fs_root: str = "./data/nas_root"

    # Local state (relative resolved from backend/ at runtime)
    data_dir: str = "./data"
    database_path: str = "./data/nasbox.db"

    # Sessions
    session_cookie_name: str = "nasbox_session"
    session_expire_minutes: int = 720  # 12 hours
    session_cookie_secure: bool = False

    # Rendering
    theme: str = "dark"

    # Accounts
    admin_username: str = ""  # seeded at startup if set
    admin_password: str = ""
    allow_registration: bool = False

    # Runtime limits
    uvicorn_workers: int = 1
    max_db_connections: int = 5

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),
        env_file_encoding="utf-8",
        env_prefix="NASBOX_",
        extra="ignore",
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def assemble_cors_origins(cls, value: list[str] | str) -> list[str]:
        if isinstance(value, str) and not value.startswith("["):
            return [o.strip() for o in value.split(",") if o.strip()]
        if isinstance(value, list):
            return value
        return ["http://localhost:5173"]

    @model_validator(mode="after")
    def _resolve_paths(self) -> "Settings":
        """Ensure storage and data paths are absolute."""
        base = Path(__file__).resolve().parent.parent  # backend/
        for field in ("fs_root", "data_dir", "database_path"):
            val = getattr(self, field)
            if not Path(val).is_absolute():
                setattr(self, field, str((base / val).resolve()))
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
