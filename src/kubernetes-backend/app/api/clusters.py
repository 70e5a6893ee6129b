"""Configured clusters API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request

from shared.models import ClusterSummary

router = APIRouter()


@router.get(
    "/clusters",
    response_model=list[ClusterSummary],
    summary="List configured clusters",
    description="Names and API URLs of the clusters the backend queries. Never includes credentials.",
)
async def list_clusters(request: Request):
    clusters = await request.app.state.cluster_locator.get_clusters()
    return [ClusterSummary(name=cluster.name, url=cluster.url) for cluster in clusters]
