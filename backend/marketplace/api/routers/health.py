"""Simple health and readiness endpoints."""

from __future__ import annotations

from datetime import datetime, timezone
import logging
from typing import Any

from fastapi import APIRouter, HTTPException, status

from marketplace.core.config import get_settings
from marketplace.db.schema import is_store_ready, probe_database
from marketplace.db.session import engine

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["health"])

SERVICE_NAME = "product-marketplace-api"


def _database_check() -> dict[str, Any]:
    healthy, message = probe_database(engine)
    return {"status": "healthy" if healthy else "unhealthy", "message": message}


@router.get("", summary="Service health with store readiness")
def health() -> dict[str, Any]:
    """Always 200 while the process is up; ``ready`` says whether the store is usable."""
    database = _database_check()
    ready = is_store_ready() and database["status"] == "healthy"
    return {
        "status": "ok",
        "service": get_settings().app_name,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "ready": ready,
        "database": database,
    }


@router.get("/live", summary="Liveness probe")
def live() -> dict[str, str]:
    """Indicates API process is running."""
    return {"status": "ok", "service": SERVICE_NAME}


@router.get("/ready", summary="Readiness probe")
def ready() -> dict[str, Any]:
    """Check that the products table exists and the database answers.

    Used by load balancers to determine if traffic should be routed to this instance.
    """
    checks: dict[str, Any] = {
        "status": "ok",
        "service": SERVICE_NAME,
        "checks": {
            "schema": {
                "status": "healthy" if is_store_ready() else "unhealthy",
                "message": "Products table ready"
                if is_store_ready()
                else "Schema initialization has not succeeded",
            },
            "database": _database_check(),
        },
    }

    if any(check["status"] != "healthy" for check in checks["checks"].values()):
        checks["status"] = "unhealthy"
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=checks,
        )

    return checks
