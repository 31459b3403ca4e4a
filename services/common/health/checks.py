"""Health check implementations."""

import logging
from fastapi import status
from fastapi.responses import JSONResponse
from ..database.registry import Registry

logger = logging.getLogger(__name__)


async def health_check(service_name: str = "unknown") -> JSONResponse:
    """Basic health check endpoint."""
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={"status": "healthy", "service": service_name}
    )


async def readiness_check(registry: Registry) -> JSONResponse:
    """
    Readiness check - verifies service is ready to accept traffic.
    Pings MongoDB through the registry's driver handle.

    Args:
        registry: The database registry

    Returns:
        JSONResponse: Readiness status, 503 if MongoDB does not answer
    """
    checks = {}
    all_ready = True

    try:
        await registry.client.admin.command('ping')
        checks["mongodb"] = "ready"
    except Exception as e:
        logger.error(f"MongoDB readiness check failed: {e}")
        checks["mongodb"] = "not ready"
        all_ready = False

    status_code = status.HTTP_200_OK if all_ready else status.HTTP_503_SERVICE_UNAVAILABLE

    return JSONResponse(
        status_code=status_code,
        content={
            "status": "ready" if all_ready else "not ready",
            "checks": checks
        }
    )


async def liveness_check() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={"status": "alive"}
    )
