"""Kubernetes Backend FastAPI Application.

The Kubernetes backend provides:
- Read-only listing of a service's objects across configured clusters
- Per cluster, per resource type partial-success results
- The list of configured clusters
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config import KubernetesBackendSettings
from shared.observability import get_logger, setup_logging

from .api import clusters, health, services
from .middleware import RequestLoggingMiddleware
from .services.client_provider import ClientProvider, KubernetesClientProvider
from .services.fanout import KubernetesFanOutHandler
from .services.fetcher import KubernetesClientBasedFetcher
from .services.service_locator import (
    ClusterLocator,
    ConfigClusterLocator,
    create_service_locator,
)

settings = KubernetesBackendSettings()
setup_logging(log_level=settings.log_level, log_format=settings.log_format)
logger = get_logger(__name__)


def build_fanout_handler(
    backend_settings: KubernetesBackendSettings,
    client_provider: ClientProvider | None = None,
    cluster_locator: ClusterLocator | None = None,
) -> KubernetesFanOutHandler:
    """Wire locator, fetcher and fan-out handler from settings."""
    fetcher = KubernetesClientBasedFetcher(
        client_provider or KubernetesClientProvider(),
        service_id_label=backend_settings.service_id_label,
    )
    return KubernetesFanOutHandler(
        create_service_locator(backend_settings, cluster_locator),
        fetcher,
        object_types=backend_settings.object_types,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger.info("Starting Kubernetes backend service", version=settings.app_version)

    client_provider = KubernetesClientProvider()
    cluster_locator = ConfigClusterLocator.from_settings(settings.clusters)
    app.state.cluster_locator = cluster_locator
    app.state.fanout_handler = build_fanout_handler(settings, client_provider, cluster_locator)

    logger.info(
        "Kubernetes backend service started successfully",
        clusters=[cluster.name for cluster in settings.clusters],
        service_locator_method=settings.service_locator_method.value,
    )

    yield

    logger.info("Shutting down Kubernetes backend service")
    await client_provider.close()


app = FastAPI(
    title="Kubernetes Backend Service",
    description="Read-only listing of Kubernetes objects per service across clusters",
    version=settings.app_version,
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.is_development else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)

# Include routers
app.include_router(services.router, prefix="/api/v1", tags=["Services"])
app.include_router(clusters.router, prefix="/api/v1", tags=["Clusters"])
app.include_router(health.router, tags=["Health"])


@app.get("/")
async def root():
    """Root endpoint with service info."""
    return {
        "service": "kubernetes-backend",
        "version": settings.app_version,
        "docs": "/docs",
    }


def run() -> None:
    """Serve the application with uvicorn."""
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        workers=settings.workers,
        log_config=None,
    )
