"""Fan-out fetcher listing a service's objects on one cluster.

One list call is issued per requested resource type, all concurrently.
Successful calls become TypedResponses, failed calls become FetchErrors;
a failing type never fails the whole fetch.
"""

from __future__ import annotations

import asyncio
import inspect
import time
from collections.abc import Awaitable, Iterable
from typing import Any, NamedTuple

from kubernetes import client

from shared.models import (
    ClusterDetails,
    FetchError,
    FetchRequest,
    ObjectsByServiceIdResponse,
    ResourceType,
    TypedResponse,
)
from shared.observability import get_logger, log_list_call_end, log_list_call_start

from .client_provider import ClientProvider, resolve_client
from .errors import UnrecognisedResourceTypeError, classify_error

logger = get_logger(__name__)

DEFAULT_SERVICE_ID_LABEL = "backstage.io/kubernetes-id"


class ListOperation(NamedTuple):
    """Client method listing one resource type, and the path it reads."""

    method: str
    path: str


LIST_OPERATIONS: dict[ResourceType, ListOperation] = {
    ResourceType.PODS: ListOperation("list_pod_for_all_namespaces", "/api/v1/pods"),
    ResourceType.SERVICES: ListOperation(
        "list_service_for_all_namespaces", "/api/v1/services"
    ),
    ResourceType.CONFIGMAPS: ListOperation(
        "list_config_map_for_all_namespaces", "/api/v1/configmaps"
    ),
    ResourceType.DEPLOYMENTS: ListOperation(
        "list_deployment_for_all_namespaces", "/apis/apps/v1/deployments"
    ),
    ResourceType.REPLICASETS: ListOperation(
        "list_replica_set_for_all_namespaces", "/apis/apps/v1/replicasets"
    ),
    ResourceType.HORIZONTAL_POD_AUTOSCALERS: ListOperation(
        "list_horizontal_pod_autoscaler_for_all_namespaces",
        "/apis/autoscaling/v1/horizontalpodautoscalers",
    ),
    ResourceType.INGRESSES: ListOperation(
        "list_ingress_for_all_namespaces", "/apis/networking.k8s.io/v1/ingresses"
    ),
}


def validate_resource_types(requested_types: Iterable[Any]) -> list[ResourceType]:
    """Check every requested type and return them in canonical order.

    Raises:
        UnrecognisedResourceTypeError: a value is not a supported type
    """
    requested: set[ResourceType] = set()
    for value in requested_types:
        try:
            requested.add(ResourceType(value))
        except ValueError:
            raise UnrecognisedResourceTypeError(value) from None
    return [resource_type for resource_type in ResourceType if resource_type in requested]


class KubernetesClientBasedFetcher:
    """Lists a service's objects through typed Kubernetes API clients."""

    def __init__(
        self,
        client_provider: ClientProvider,
        service_id_label: str = DEFAULT_SERVICE_ID_LABEL,
    ):
        self.client_provider = client_provider
        self.service_id_label = service_id_label
        self._serializer: client.ApiClient | None = None

    def fetch_objects_by_service_id(
        self,
        service_id: str,
        cluster_details: ClusterDetails,
        requested_types: Iterable[Any],
    ) -> Awaitable[ObjectsByServiceIdResponse]:
        """Fetch every requested resource type of a service.

        Types are validated before anything else happens, so an
        unrecognised type raises right here, not when the result is awaited.

        Args:
            service_id: Service whose labelled objects are listed
            cluster_details: Cluster to query
            requested_types: Resource type names, in any order

        Returns:
            Awaitable resolving to the combined partial-success response

        Raises:
            UnrecognisedResourceTypeError: a requested type is not supported
        """
        resource_types = validate_resource_types(requested_types)
        return self._fetch(service_id, cluster_details, resource_types)

    def fetch(self, request: FetchRequest) -> Awaitable[ObjectsByServiceIdResponse]:
        """Fetch the objects described by ``request``."""
        return self.fetch_objects_by_service_id(
            request.service_id, request.cluster, request.requested_types
        )

    async def _fetch(
        self,
        service_id: str,
        cluster_details: ClusterDetails,
        resource_types: list[ResourceType],
    ) -> ObjectsByServiceIdResponse:
        logger.debug(
            "Fetching objects",
            service_id=service_id,
            cluster=cluster_details.name,
            resource_types=[t.value for t in resource_types],
        )

        results = await asyncio.gather(
            *(
                self._list_objects(service_id, cluster_details, resource_type)
                for resource_type in resource_types
            ),
            return_exceptions=True,
        )

        responses: list[TypedResponse] = []
        errors: list[FetchError] = []

        for resource_type, result in zip(resource_types, results):
            if isinstance(result, BaseException):
                fetch_error = classify_error(result, LIST_OPERATIONS[resource_type].path)
                logger.warning(
                    "Failed to list objects",
                    service_id=service_id,
                    cluster=cluster_details.name,
                    resource_type=resource_type.value,
                    error_type=fetch_error.error_type,
                    status_code=fetch_error.status_code,
                )
                errors.append(fetch_error)
            else:
                responses.append(TypedResponse(type=resource_type, resources=result))

        logger.debug(
            "Fetched objects",
            service_id=service_id,
            cluster=cluster_details.name,
            succeeded=len(responses),
            failed=len(errors),
        )

        return ObjectsByServiceIdResponse(responses=responses, errors=errors)

    async def _list_objects(
        self,
        service_id: str,
        cluster_details: ClusterDetails,
        resource_type: ResourceType,
    ) -> list[Any]:
        """List one resource type for the service across all namespaces."""
        api = resolve_client(self.client_provider, cluster_details, resource_type.category)
        operation = LIST_OPERATIONS[resource_type]
        method = getattr(api, operation.method)
        label_selector = f"{self.service_id_label}={service_id}"

        log_list_call_start(logger, cluster_details.name, resource_type.value)
        start = time.monotonic()
        try:
            if inspect.iscoroutinefunction(method):
                result = await method(label_selector=label_selector)
            else:
                # kubernetes client calls block on urllib3
                result = await asyncio.to_thread(method, label_selector=label_selector)
                if inspect.isawaitable(result):
                    result = await result
        except Exception as e:
            log_list_call_end(
                logger,
                cluster_details.name,
                resource_type.value,
                duration_ms=(time.monotonic() - start) * 1000,
                error=e,
            )
            raise

        items = self._extract_items(result)
        log_list_call_end(
            logger,
            cluster_details.name,
            resource_type.value,
            duration_ms=(time.monotonic() - start) * 1000,
            item_count=len(items),
        )
        return items

    def _extract_items(self, result: Any) -> list[Any]:
        """Pull the object list out of a list response.

        Accepts kubernetes list models (``.items``) as well as
        ``{"body": {"items": [...]}}`` shaped envelopes. Kubernetes model
        items are serialised with the API's own field names, anything else
        is passed through untouched.
        """
        body = result.get("body", result) if isinstance(result, dict) else getattr(
            result, "body", result
        )
        items = body.get("items") if isinstance(body, dict) else getattr(body, "items", None)

        return [
            self._sanitize(item) if hasattr(item, "openapi_types") else item
            for item in items or []
        ]

    def _sanitize(self, item: Any) -> dict[str, Any]:
        if self._serializer is None:
            self._serializer = client.ApiClient()
        return self._serializer.sanitize_for_serialization(item)
