"""Health check endpoint."""

from fastapi import APIRouter
from dump1090_exporter.config import settings

router = APIRouter()


@router.get("/healthz", summary="Health check")
def health_check() -> dict[str, str]:
    """Liveness only; receivers are never contacted here."""
    return {"status": "ok", "env": settings.env}
