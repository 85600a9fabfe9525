"""
==============================================================================
Health Check Endpoints
==============================================================================

System health status endpoints for monitoring and orchestration.

==============================================================================
"""

import os

from fastapi import APIRouter, Depends

from pizzaria.catalog.store import get_store
from pizzaria.core.dependencies import get_upload_sink
from pizzaria.services.upload_service import UploadSink


router = APIRouter(prefix="/health", tags=["Health"])


class HealthController:
    """Controller for health check operations."""

    def __init__(self, uploads: UploadSink):
        self._uploads = uploads

    def check_uploads(self) -> str:
        """Check the uploads directory is writable."""
        directory = self._uploads.directory
        if directory.is_dir() and os.access(directory, os.W_OK):
            return "healthy"
        return "unhealthy"

    def check_store(self) -> dict:
        """Check store status."""
        store = get_store()
        if store:
            return {"status": "healthy", "products": store.stats()}
        return {"status": "not_loaded", "products": {}}

    def get_health(self) -> dict:
        """Get full health status."""
        uploads_status = self.check_uploads()
        store_info = self.check_store()

        healthy = uploads_status == "healthy" and store_info["status"] == "healthy"

        return {
            "status": "healthy" if healthy else "degraded",
            "components": {
                "api": "healthy",
                "uploads": uploads_status,
                "store": store_info["status"]
            },
            "details": {
                "products": store_info["products"],
                "uploads_directory": str(self._uploads.directory)
            }
        }


@router.get("")
async def health_check(uploads: UploadSink = Depends(get_upload_sink)):
    """
    Health check endpoint.

    Returns system status including the store and the uploads directory.
    """
    controller = HealthController(uploads)
    return controller.get_health()


@router.get("/ready")
async def readiness_check():
    """Readiness probe for container orchestration."""
    return {"ready": get_store() is not None}


@router.get("/live")
async def liveness_check():
    """Liveness probe for container orchestration."""
    return {"alive": True}
