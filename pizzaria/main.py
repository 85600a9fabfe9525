"""
==============================================================================
Pizzaria Catalog API - Application Entry Point
==============================================================================

FastAPI application with:
- Product catalog endpoints for pizzas and beverages
- Image uploads served back as static files
- In-memory storage, reset on every restart

Usage:
------
    # Development
    uvicorn pizzaria.main:app --reload --port 3001

    # Or through the module entry point (honours PORT)
    python -m pizzaria.main

==============================================================================
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles

from pizzaria import __version__
from pizzaria.api.router import api_router
from pizzaria.catalog.store import init_store
from pizzaria.config import get_settings
from pizzaria.core.dependencies import get_upload_sink
from pizzaria.core.exceptions import register_exception_handlers


# ============================================================================
# LOGGING SETUP
# ============================================================================

settings = get_settings()

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)

logger = logging.getLogger(__name__)


# ============================================================================
# APPLICATION FACTORY
# ============================================================================

class Application:
    """
    FastAPI application factory and manager.

    Handles application lifecycle including:
    - Startup (store seeding, placeholder check)
    - Middleware configuration
    - Router registration and the uploads mount
    - Exception handler setup
    """

    def __init__(self):
        """Initialize the application."""
        self._settings = get_settings()
        self._app = self._create_app()

    def _create_app(self) -> FastAPI:
        """Create and configure the FastAPI application."""
        app = FastAPI(
            title=self._settings.app_name,
            version=__version__,
            description="Pizza and beverage catalog with image uploads",
            lifespan=self._lifespan,
            docs_url="/docs",
            redoc_url="/redoc",
        )

        self._configure_middleware(app)

        register_exception_handlers(app)

        self._register_routers(app)

        # Uploaded images
        app.mount(
            self._settings.uploads_url_prefix,
            StaticFiles(directory=self._settings.uploads_path),
            name="uploads",
        )

        self._register_root(app)

        return app

    @asynccontextmanager
    async def _lifespan(self, app: FastAPI):
        """Application lifespan manager."""
        self._startup()
        yield
        self._shutdown()

    def _startup(self) -> None:
        """Application startup tasks."""
        logger.info("=" * 60)
        logger.info(f"🚀 Starting {self._settings.app_name}")
        logger.info("=" * 60)

        store = init_store()
        logger.info(f"✅ In-memory store ready: {store.stats()}")
        logger.info("Data is kept in memory only and is lost on restart")

        self._check_placeholders(store.images())

        logger.info("=" * 60)
        logger.info(f"✅ {self._settings.app_name} ready")
        logger.info(f"📍 Running on http://{self._settings.host}:{self._settings.port}")
        logger.info(f"🖼️ Uploads: {self._settings.uploads_path.resolve()}")
        logger.info(f"📖 API Docs: http://{self._settings.host}:{self._settings.port}/docs")
        logger.info("=" * 60)

    def _shutdown(self) -> None:
        """Application shutdown tasks."""
        logger.info("🛑 Shutting down, in-memory products discarded")

    def _check_placeholders(self, references) -> None:
        """Warn about seed placeholder images missing from the uploads directory."""
        uploads = get_upload_sink()
        missing = sorted({
            reference for reference in references
            if self._settings.placeholder_marker in reference
            and not uploads.exists(reference)
        })
        for reference in missing:
            logger.warning(f"⚠️ Placeholder image missing: {reference} (create it in {uploads.directory})")

    def _configure_middleware(self, app: FastAPI) -> None:
        """Configure application middleware."""
        app.add_middleware(
            CORSMiddleware,
            allow_origins=self._settings.cors_origins_list,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    def _register_routers(self, app: FastAPI) -> None:
        """Register API routers."""
        app.include_router(api_router)

    def _register_root(self, app: FastAPI) -> None:
        """Register root endpoint."""

        @app.get("/", include_in_schema=False)
        async def root():
            """Redirect to the interactive API docs."""
            return RedirectResponse(url="/docs")

    @property
    def app(self) -> FastAPI:
        """Get the FastAPI application instance."""
        return self._app


# ============================================================================
# APPLICATION INSTANCE
# ============================================================================

application = Application()
app = application.app


# ============================================================================
# ENTRY POINT
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "pizzaria.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info"
    )
