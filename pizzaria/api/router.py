"""
==============================================================================
Main API Router
==============================================================================

Combines the catalog routes under the /api prefix. Health checks live
outside the prefix so they can never shadow a category token.

==============================================================================
"""

from fastapi import APIRouter

from pizzaria.api.routes import health, products


class MainAPIRouter:
    """
    Main API router combining all routes.

    Provides a single entry point for all API endpoints.
    """

    def __init__(self):
        """Initialize the main router with all sub-routers."""
        self._router = APIRouter()
        self._include_routers()

    def _include_routers(self) -> None:
        """Include all routers."""
        self._router.include_router(health.router)
        self._router.include_router(products.router, prefix="/api")

    @property
    def router(self):
        """Get the FastAPI router instance."""
        return self._router


# Create main API router instance
api_router = MainAPIRouter().router
