"""
==============================================================================
Health Check Endpoints
==============================================================================

System health status endpoints for monitoring and orchestration.

==============================================================================
"""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from furniture_visualizer.catalog import BarcodeCatalog
from furniture_visualizer.core.dependencies import get_catalog, get_db


router = APIRouter(prefix="/health", tags=["Health"])


class HealthController:
    """Controller for health check operations."""

    def __init__(self, db: Session, catalog: BarcodeCatalog):
        self._db = db
        self._catalog = catalog

    def check_storage(self) -> str:
        """Check storage database connectivity."""
        try:
            self._db.execute(text("SELECT 1"))
            return "healthy"
        except SQLAlchemyError:
            return "unhealthy"

    def check_catalog(self) -> dict:
        """Check catalog status."""
        records = len(self._catalog)
        return {"status": "healthy" if records else "empty", "records": records}

    def get_health(self) -> dict:
        """Get full health status."""
        storage_status = self.check_storage()
        catalog_info = self.check_catalog()

        overall = "healthy" if storage_status == "healthy" else "degraded"

        return {
            "status": overall,
            "components": {
                "api": "healthy",
                "storage": storage_status,
                "catalog": catalog_info["status"]
            },
            "details": {
                "records_loaded": catalog_info["records"]
            }
        }


@router.get("")
async def health_check(
    db: Session = Depends(get_db),
    catalog: BarcodeCatalog = Depends(get_catalog)
):
    """
    Health check endpoint.

    Returns system status including API, storage, and catalog.
    """
    controller = HealthController(db, catalog)
    return controller.get_health()


@router.get("/ready")
async def readiness_check():
    """Readiness probe for container orchestration."""
    return {"ready": True}


@router.get("/live")
async def liveness_check():
    """Liveness probe for container orchestration."""
    return {"alive": True}
