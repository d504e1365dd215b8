"""Health schemas."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
    service: str = "nasbox"
    registration_enabled: bool = False
