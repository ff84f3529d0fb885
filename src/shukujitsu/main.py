import logging

from fastapi import FastAPI

from shukujitsu.api.routes import api_router
from shukujitsu.core.config import get_settings


def create_application() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)
    app = FastAPI(
        title=settings.project_name,
        version=settings.version,
        description="API for Japanese national holidays and their substitute days.",
    )
    app.include_router(api_router, prefix="/api")

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Simple health endpoint for infrastructure monitoring."""
        return {"status": "ok"}

    return app


app = create_application()
