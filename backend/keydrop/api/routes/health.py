"""Health & Readiness Probes - liveness and readiness endpoints.

Invariants:
    - GET /api/v1/health/ always returns 200 if process is up (liveness)
    - GET /api/v1/health/ready returns 503 until every document store is open (readiness)
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from keydrop.infrastructure import store_manager as stores

router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {"status": "healthy", "service": "keydrop-api", "version": "1.0.0"}


@router.get("/ready")
async def readiness_check():
    """Readiness probe - all document stores loaded."""
    manager = stores.store_manager
    if not manager or not manager.health_check():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "document_stores_not_open"},
        )
    return {
        "status": "ready",
        "checks": {store.collection: "open" for store in manager.stores},
    }
