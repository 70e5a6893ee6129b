"""Cluster lookup: which clusters to query for a service."""

from __future__ import annotations

from typing import Protocol

from shared.config import ClusterSettings, KubernetesBackendSettings, ServiceLocatorMethod
from shared.models import ClusterDetails
from shared.observability import get_logger

from .errors import ConfigurationError

logger = get_logger(__name__)


class ClusterLocator(Protocol):
    """Source of the clusters known to the backend."""

    async def get_clusters(self) -> list[ClusterDetails]: ...


class ServiceLocator(Protocol):
    """Maps a service id onto the clusters that may run it."""

    async def get_clusters_by_service_id(self, service_id: str) -> list[ClusterDetails]: ...


class ConfigClusterLocator:
    """Clusters statically declared in settings."""

    def __init__(self, clusters: list[ClusterDetails]):
        names = [cluster.name for cluster in clusters]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ConfigurationError(f"Duplicate cluster names: {', '.join(duplicates)}")
        self._clusters = list(clusters)

    @classmethod
    def from_settings(cls, clusters: list[ClusterSettings]) -> ConfigClusterLocator:
        return cls([ClusterDetails(**cluster.model_dump()) for cluster in clusters])

    async def get_clusters(self) -> list[ClusterDetails]:
        return list(self._clusters)


class MultiTenantServiceLocator:
    """Every service may run on every cluster."""

    def __init__(self, cluster_locator: ClusterLocator):
        self.cluster_locator = cluster_locator

    async def get_clusters_by_service_id(self, service_id: str) -> list[ClusterDetails]:
        clusters = await self.cluster_locator.get_clusters()
        logger.debug(
            "Located clusters for service",
            service_id=service_id,
            clusters=[cluster.name for cluster in clusters],
        )
        return clusters


def create_service_locator(
    settings: KubernetesBackendSettings,
    cluster_locator: ClusterLocator | None = None,
) -> ServiceLocator:
    """Build the service locator selected by ``service_locator_method``.

    Args:
        settings: Backend settings
        cluster_locator: Cluster source to locate from (built from
            ``settings.clusters`` if None)

    Raises:
        ConfigurationError: the method is not supported
    """
    if cluster_locator is None:
        cluster_locator = ConfigClusterLocator.from_settings(settings.clusters)

    if settings.service_locator_method == ServiceLocatorMethod.MULTI_TENANT:
        return MultiTenantServiceLocator(cluster_locator)

    raise ConfigurationError(
        f"Unsupported service locator method '{settings.service_locator_method}'"
    )
