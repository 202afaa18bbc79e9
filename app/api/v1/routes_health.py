# app/api/v1/routes_health.py
from fastapi import APIRouter

from app.api.v1.routes_routing import network_manager
from app.core.config import settings

router = APIRouter(
    prefix="/health",
    tags=["health"],
)


@router.get("/", summary="Health check")
async def health_check():
    """
    Simple health check endpoint to verify that the API is running.

    Does not load the path network; `network_loaded` reports whether a
    request has loaded it already.
    """
    return {
        "status": "ok",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "network_loaded": network_manager.is_loaded(),
    }
