# textshare/routers/health.py
# Health check endpoints for monitoring and load balancers
# Provides liveness and readiness probes

import time
import logging
from typing import Dict, Any
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from textshare.errors import PersistenceFailure
from textshare.repositories.local_storage_repository import LocalStorage

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


class HealthStatus(BaseModel):
    """Health check response model."""
    status: str  # "healthy", "degraded"
    timestamp: float
    version: str = "1.0.0"
    checks: Dict[str, Dict[str, Any]] = {}


class ComponentHealth(BaseModel):
    """Individual component health."""
    status: str
    latency_ms: float = 0.0
    message: str = ""


def get_storage() -> LocalStorage:
    return LocalStorage()


def check_storage_health(storage: LocalStorage) -> ComponentHealth:
    """Check that the local key/value store answers."""
    start = time.time()

    try:
        storage.ping()
    except PersistenceFailure as e:
        logger.error(f"Storage health check failed: {e.message}")
        # a broken store only degrades the service
        return ComponentHealth(
            status="degraded",
            latency_ms=(time.time() - start) * 1000,
            message=f"Storage error: {e.details.get('reason', e.message)}"
        )

    return ComponentHealth(
        status="healthy",
        latency_ms=(time.time() - start) * 1000,
        message="Storage reachable"
    )


@router.get("/health", response_model=HealthStatus)
def health_check(storage: LocalStorage = Depends(get_storage)):
    """
    Full health check endpoint.
    Returns status of all components.
    """
    storage_health = check_storage_health(storage)
    checks = {
        "storage": {
            "status": storage_health.status,
            "latency_ms": round(storage_health.latency_ms, 2),
            "message": storage_health.message
        }
    }

    statuses = [c["status"] for c in checks.values()]
    overall_status = "degraded" if "degraded" in statuses else "healthy"

    return HealthStatus(
        status=overall_status,
        timestamp=time.time(),
        checks=checks
    )


@router.get("/health/live")
async def liveness_probe():
    """
    Liveness probe.
    Returns 200 if the application is running.
    Does NOT check external dependencies.
    """
    return {"status": "alive"}


@router.get("/health/ready")
def readiness_probe(storage: LocalStorage = Depends(get_storage)):
    """
    Readiness probe.
    Links are encoded and decoded without storage, so only a failing
    store is reported; the service stays ready.
    """
    storage_health = check_storage_health(storage)
    if storage_health.status != "healthy":
        return {"status": "ready", "degraded": storage_health.message}
    return {"status": "ready"}
