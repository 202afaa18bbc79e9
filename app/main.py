# app/main.py

from fastapi import FastAPI

from app.api.v1 import routes_health, routes_network, routes_routing
from app.core.config import settings
from app.core.logger import logger


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Walking routes from any position to a node of a campus path network.",
    )

    # Routers
    app.include_router(routes_health.router, prefix="", tags=["health"])
    app.include_router(routes_routing.router, prefix="", tags=["routing"])
    app.include_router(routes_network.router, prefix="", tags=["network"])

    logger.info(f"{settings.APP_NAME} {settings.APP_VERSION} ({settings.ENVIRONMENT}) ready")
    return app


app = create_app()
