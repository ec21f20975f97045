"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI

from photo_catalog.app.exception_handlers import configure_exception_handlers
from photo_catalog.app.lifespan import lifespan
from photo_catalog.app.router import setup_routers
from photo_catalog.core.settings import get_settings


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()
    app_settings = settings.app
    docs_enabled = not app_settings.disable_docs

    app = FastAPI(
        title=app_settings.title,
        version=app_settings.version,
        docs_url=app_settings.docs_url if docs_enabled else None,
        redoc_url=None,
        openapi_url=app_settings.openapi_url if docs_enabled else None,
        debug=app_settings.debug,
        lifespan=lifespan,
    )

    configure_exception_handlers(app)
    setup_routers(app, app_settings)

    return app


# Application instance for uvicorn
app = create_app()
