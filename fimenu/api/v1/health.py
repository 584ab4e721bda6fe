"""
==============================================================================
Health Check Endpoints
==============================================================================

System health status endpoints for monitoring and orchestration.

==============================================================================
"""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session

from fimenu.catalog import ProductCatalog
from fimenu.config import get_settings
from fimenu.db.database import get_db


router = APIRouter(prefix="/health", tags=["Health"])


class HealthController:
    """Controller for health check operations."""

    def __init__(self, db: Session):
        self._db = db

    def check_database(self) -> str:
        """Check key-value store connectivity."""
        try:
            self._db.execute(text("SELECT 1"))
            return "healthy"
        except Exception:
            return "unhealthy"

    def check_catalog(self) -> dict:
        """Check the built-in catalog loads."""
        catalog = ProductCatalog.default()
        return {"status": "healthy", "products": len(catalog)}

    def get_health(self) -> dict:
        """Get full health status."""
        db_status = self.check_database()
        catalog_info = self.check_catalog()
        admin_gate = "configured" if get_settings().admin_configured else "locked"

        overall = "healthy" if db_status == "healthy" else "degraded"

        return {
            "status": overall,
            "components": {
                "api": "healthy",
                "database": db_status,
                "catalog": catalog_info["status"],
                "admin_gate": admin_gate,
            },
            "details": {
                "default_products": catalog_info["products"]
            }
        }


@router.get("")
def health_check(db: Session = Depends(get_db)):
    """
    Health check endpoint.

    Returns system status including API, database and catalog.
    """
    controller = HealthController(db)
    return controller.get_health()


@router.get("/ready")
async def readiness_check():
    """Readiness probe for container orchestration."""
    return {"ready": True}


@router.get("/live")
async def liveness_check():
    """Liveness probe for container orchestration."""
    return {"alive": True}
