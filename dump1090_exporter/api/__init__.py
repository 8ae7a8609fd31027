"""API routers for the dump1090 exporter."""

from fastapi import APIRouter

from .health import router as health_router
from .landing import router as landing_router
from .metrics import router as metrics_router

api_router = APIRouter()
api_router.include_router(landing_router)
api_router.include_router(health_router)
api_router.include_router(metrics_router)

__all__ = ["api_router"]
