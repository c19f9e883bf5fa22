"""Health check."""

from fastapi import APIRouter

from phonedrop import __version__
from phonedrop.config import settings
from phonedrop.schemas.system import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Lightweight connectivity check for the phone and the dashboard."""
    return HealthResponse(version=__version__, upload_auth=bool(settings.upload_secret))


@router.get("/ping")
async def ping():
    """Ultra-lightweight ping."""
    return {"status": "ok"}
