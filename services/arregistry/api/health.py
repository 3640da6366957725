"""
Health check endpoints for the registry server.

Provides /health (liveness) and /ready (readiness) endpoints.
"""

from fastapi import APIRouter, Response, status

from arregistry.api.schemas import HealthResponse
from arregistry.logging_config import get_logger
from arregistry.storage import get_storage_or_none

router = APIRouter(tags=["health"])
logger = get_logger(__name__)


@router.get("/health", status_code=status.HTTP_200_OK)
async def health() -> HealthResponse:
    """Liveness probe endpoint.

    Returns 200 if the server is running.
    """
    return HealthResponse(status="OK")


@router.get("/ready", status_code=status.HTTP_200_OK)
async def ready(response: Response) -> dict[str, str | dict[str, str]]:
    """Readiness probe endpoint.

    Checks that the Artifact Registry client is initialized.
    """
    checks = {"storage": "healthy" if get_storage_or_none() is not None else "unhealthy"}

    if any(v != "healthy" for v in checks.values()):
        logger.warning("Readiness check failed", checks=checks)
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return {"status": "not ready", "checks": checks}

    return {"status": "ready", "checks": checks}
