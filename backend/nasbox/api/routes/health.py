"""Health check."""

from fastapi import APIRouter

from nasbox import __version__
from nasbox.config import settings
from nasbox.schemas.system import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Lightweight connectivity check."""
    return HealthResponse(
        version=__version__,
        registration_enabled=settings.allow_registration,
    )


@router.get("/ping")
async def ping():
    """Ultra-lightweight ping."""
    return {"status": "ok"}
