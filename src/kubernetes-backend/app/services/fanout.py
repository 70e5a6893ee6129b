"""Fetch a service's objects from every cluster it may run on."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from typing import Any

from shared.models import (
    ClusterObjects,
    ClusterSummary,
    ResourceType,
    ServiceObjectsResponse,
)
from shared.observability import get_logger

from .errors import classify_error
from .fetcher import KubernetesClientBasedFetcher, validate_resource_types
from .service_locator import ServiceLocator

logger = get_logger(__name__)


class KubernetesFanOutHandler:
    """Runs the fetcher against all located clusters concurrently."""

    def __init__(
        self,
        service_locator: ServiceLocator,
        fetcher: KubernetesClientBasedFetcher,
        object_types: Iterable[Any] | None = None,
    ):
        self.service_locator = service_locator
        self.fetcher = fetcher
        self.object_types = validate_resource_types(
            object_types if object_types is not None else ResourceType
        )

    async def get_kubernetes_objects_by_service_id(
        self,
        service_id: str,
        object_types: Iterable[Any] | None = None,
    ) -> ServiceObjectsResponse:
        """Fetch objects of ``service_id`` from each located cluster.

        Args:
            service_id: Service whose objects are listed
            object_types: Resource types to fetch (handler defaults if None)

        Returns:
            One ClusterObjects entry per cluster, in locator order

        Raises:
            UnrecognisedResourceTypeError: a requested type is not supported
        """
        resource_types = (
            validate_resource_types(object_types)
            if object_types is not None
            else self.object_types
        )

        clusters = await self.service_locator.get_clusters_by_service_id(service_id)

        logger.info(
            "Fetching service objects",
            service_id=service_id,
            clusters=len(clusters),
            resource_types=[t.value for t in resource_types],
        )

        results = await asyncio.gather(
            *(
                self.fetcher.fetch_objects_by_service_id(service_id, cluster, resource_types)
                for cluster in clusters
            ),
            return_exceptions=True,
        )

        items: list[ClusterObjects] = []
        for cluster, result in zip(clusters, results):
            summary = ClusterSummary(name=cluster.name)
            if isinstance(result, BaseException):
                logger.error(
                    "Cluster fetch failed",
                    service_id=service_id,
                    cluster=cluster.name,
                    error=str(result),
                )
                items.append(ClusterObjects(cluster=summary, errors=[classify_error(result)]))
            else:
                items.append(
                    ClusterObjects(
                        cluster=summary,
                        resources=result.responses,
                        errors=result.errors,
                    )
                )

        return ServiceObjectsResponse(items=items)
