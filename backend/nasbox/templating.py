"""Jinja2 rendering of the HTML auth and error pages."""

from __future__ import annotations

from pathlib import Path

from fastapi import Request
from fastapi.templating import Jinja2Templates
from starlette.responses import Response

from nasbox.config import settings

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))


def render_auth_page(
    request: Request,
    message: str | None = None,
    status_code: int = 401,
    logged_in: bool = False,
    redirect_url: str | None = None,
) -> Response:
    return templates.TemplateResponse(
        request,
        "auth.html",
        {
            "theme": settings.theme,
            "logged_in": logged_in,
            "message": message,
            "redirect_url": redirect_url,
            "login_url": f"{settings.api_prefix}/auth/login",
        },
        status_code=status_code,
    )


def render_error_page(
    request: Request,
    status_code: int,
    title: str,
    message: str,
    path: str | None = None,
) -> Response:
    """Render the generic error page; ``path`` is echoed only when given."""
    return templates.TemplateResponse(
        request,
        "error.html",
        {
            "theme": settings.theme,
            "status_code": status_code,
            "title": title,
            "message": message,
            "path": path,
        },
        status_code=status_code,
    )
