"""Translate storage and auth errors into HTTP responses.

Status codes:
    DecodeError, InvalidPathError   400
    OutsideRootError                403  (no path echoed)
    NotFoundError                   404
    StorageIOError                  500
    TypeMismatchError               500
    DeleteFailedError               500
    LoginRequired                   401  (auth page)
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from starlette.responses import Response

from nasbox.storage import (
    DecodeError,
    DeleteFailedError,
    InvalidPathError,
    NotFoundError,
    OutsideRootError,
    StorageError,
    StorageIOError,
    TypeMismatchError,
)
from nasbox.templating import render_auth_page, render_error_page


class LoginRequired(Exception):
    """Raised by auth dependencies when no valid session is present."""

    def __init__(self, message: str = "Protected resource, please log in"):
        self.message = message
        super().__init__(message)


# Most specific first; lookup walks the MRO
ERROR_RESPONSES: dict[type[StorageError], tuple[int, str, str]] = {
    DecodeError: (400, "Bad Request", "The requested path is not valid UTF-8."),
    InvalidPathError: (400, "Bad Request", "The requested path is invalid."),
    OutsideRootError: (403, "Forbidden", "Access denied."),
    NotFoundError: (404, "Not Found", "No such file or directory."),
    TypeMismatchError: (500, "Operation Failed", "The file changed while it was being deleted."),
    DeleteFailedError: (500, "Operation Failed", "The file could not be deleted."),
    StorageIOError: (500, "Operation Failed", "The file could not be read."),
    StorageError: (500, "Operation Failed", "The operation failed."),
}


def error_response_for(exc: StorageError) -> tuple[int, str, str]:
    for cls in type(exc).__mro__:
        if cls in ERROR_RESPONSES:
            return ERROR_RESPONSES[cls]
    return ERROR_RESPONSES[StorageError]


async def _storage_error_handler(request: Request, exc: StorageError) -> Response:
    status_code, title, message = error_response_for(exc)
    return render_error_page(request, status_code, title, message, path=exc.display_path)


async def _login_required_handler(request: Request, exc: LoginRequired) -> Response:
    return render_auth_page(request, message=exc.message, redirect_url=str(request.url.path))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StorageError, _storage_error_handler)
    app.add_exception_handler(LoginRequired, _login_required_handler)
