"""API route registration."""

from fastapi import APIRouter

from nasbox.api.routes import health, auth, files

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(files.router, prefix="/fs", tags=["files"])
