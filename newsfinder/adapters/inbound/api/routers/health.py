"""Health check endpoints."""

import logging

from fastapi import APIRouter

from ..... import __version__
from ..deps import get_backend
from ..models import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe; does not touch the search backend."""
    return HealthResponse(status="healthy", version=__version__, search_backend="not_checked")


@router.get("/ready", response_model=HealthResponse)
def readiness_check() -> HealthResponse:
    """Readiness probe reporting the search backend state.

    Search keeps working without the backend, so an unreachable backend
    reports ``degraded`` rather than failing the probe.
    """
    try:
        backend = get_backend()
        if backend.is_available():
            backend_status = f"connected ({backend.count()} docs in {backend.index_name})"
            status = "ready"
        else:
            backend_status = "unreachable"
            status = "degraded"
    except Exception as e:
        logger.warning("Readiness check failed: %s", e)
        backend_status = f"error: {e}"
        status = "degraded"

    return HealthResponse(status=status, version=__version__, search_backend=backend_status)
