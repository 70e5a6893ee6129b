"""Kubernetes object fetching models."""

from enum import Enum
from typing import Any

from pydantic import ConfigDict, Field

from .base import BackendBaseModel


# Declaration order is the canonical order of every fetch result.
class ResourceType(str, Enum):
    """Kind of cluster object that can be listed for a service."""

    PODS = "pods"
    SERVICES = "services"
    CONFIGMAPS = "configmaps"
    DEPLOYMENTS = "deployments"
    REPLICASETS = "replicasets"
    HORIZONTAL_POD_AUTOSCALERS = "horizontalpodautoscalers"
    INGRESSES = "ingresses"

    @property
    def category(self) -> "ClientCategory":
        """API client family that lists this type."""
        return RESOURCE_TYPE_CATEGORIES[self]


class ClientCategory(str, Enum):
    """Kubernetes API group family served by one typed client."""

    CORE = "core"
    APPS = "apps"
    AUTOSCALING = "autoscaling"
    NETWORKING = "networking"


RESOURCE_TYPE_CATEGORIES: dict[ResourceType, ClientCategory] = {
    ResourceType.PODS: ClientCategory.CORE,
    ResourceType.SERVICES: ClientCategory.CORE,
    ResourceType.CONFIGMAPS: ClientCategory.CORE,
    ResourceType.DEPLOYMENTS: ClientCategory.APPS,
    ResourceType.REPLICASETS: ClientCategory.APPS,
    ResourceType.HORIZONTAL_POD_AUTOSCALERS: ClientCategory.AUTOSCALING,
    ResourceType.INGRESSES: ClientCategory.NETWORKING,
}


class FetchErrorType(str, Enum):
    """Classification of a failed list call."""

    UNAUTHORIZED_ERROR = "UNAUTHORIZED_ERROR"
    SYSTEM_ERROR = "SYSTEM_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class ClusterDetails(BackendBaseModel):
    """Connection details of one cluster.

    The token is opaque to the fetcher; only the client provider reads it.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    url: str = Field(description="Kubernetes API server URL")
    service_account_token: str | None = Field(default=None, repr=False)
    auth_provider: str = "serviceAccount"
    skip_tls_verify: bool = False
    ca_data: str | None = Field(default=None, repr=False)


class FetchRequest(BackendBaseModel):
    """One fetch of a service's objects on a single cluster.

    ``requested_types`` holds type names, unordered and unchecked here; the
    fetcher rejects unrecognised names and orders results by ResourceType
    declaration order.
    """

    model_config = ConfigDict(frozen=True)

    service_id: str
    cluster: ClusterDetails
    requested_types: frozenset[str] = Field(default_factory=frozenset)


class TypedResponse(BackendBaseModel):
    """Objects of one resource type listed for a service."""

    type: ResourceType
    resources: list[Any] = Field(
        default_factory=list,
        description="Objects as returned by the API, passed through unmodified",
    )


class FetchError(BackendBaseModel):
    """A failed list call for one resource type.

    ``resource_path`` and ``status_code`` are None when the underlying
    error did not expose them.
    """

    model_config = ConfigDict(frozen=True)

    error_type: FetchErrorType
    resource_path: str | None = None
    status_code: int | None = None


class ObjectsByServiceIdResponse(BackendBaseModel):
    """Partial-success result of fetching several resource types."""

    responses: list[TypedResponse] = Field(default_factory=list)
    errors: list[FetchError] = Field(default_factory=list)


class ClusterSummary(BackendBaseModel):
    """Non-secret view of a configured cluster."""

    name: str
    url: str | None = None


class ClusterObjects(BackendBaseModel):
    """Fetch result for one cluster of a fan-out."""

    cluster: ClusterSummary
    resources: list[TypedResponse] = Field(default_factory=list)
    errors: list[FetchError] = Field(default_factory=list)


class ServiceObjectsResponse(BackendBaseModel):
    """Objects of a service across every cluster it may run on."""

    items: list[ClusterObjects] = Field(default_factory=list)


class ServiceObjectsRequest(BackendBaseModel):
    """Optional body of a service objects request."""

    object_types: list[str] | None = Field(
        default=None,
        description="Resource types to fetch (all configured types if omitted)",
    )
