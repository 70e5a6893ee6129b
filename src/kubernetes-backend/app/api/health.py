"""Health check endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request

router = APIRouter()


@router.get(
    "/health",
    summary="Health check",
    description="Basic health check endpoint.",
)
async def health():
    """Basic health check."""
    return {"status": "healthy", "service": "kubernetes-backend"}


@router.get(
    "/ready",
    summary="Readiness check",
    description="Check if service is ready to receive traffic.",
)
async def ready(request: Request):
    """Readiness check.

    Ready once at least one cluster is configured.
    """
    checks = {"clusters": False}

    cluster_locator = getattr(request.app.state, "cluster_locator", None)
    if cluster_locator is not None:
        checks["clusters"] = bool(await cluster_locator.get_clusters())

    all_ready = all(checks.values())

    return {
        "status": "ready" if all_ready else "not_ready",
        "checks": checks,
    }
