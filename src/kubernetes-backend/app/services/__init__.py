"""Business logic services."""

from .client_provider import ClientProvider, KubernetesClientProvider, resolve_client
from .errors import (
    ConfigurationError,
    KubernetesBackendError,
    UnrecognisedResourceTypeError,
    UnsupportedAuthProviderError,
    classify_error,
)
from .fanout import KubernetesFanOutHandler
from .fetcher import (
    LIST_OPERATIONS,
    KubernetesClientBasedFetcher,
    ListOperation,
    validate_resource_types,
)
from .service_locator import (
    ClusterLocator,
    ConfigClusterLocator,
    MultiTenantServiceLocator,
    ServiceLocator,
    create_service_locator,
)

__all__ = [
    "LIST_OPERATIONS",
    "ClientProvider",
    "ClusterLocator",
    "ConfigClusterLocator",
    "ConfigurationError",
    "KubernetesBackendError",
    "KubernetesClientBasedFetcher",
    "KubernetesClientProvider",
    "KubernetesFanOutHandler",
    "ListOperation",
    "MultiTenantServiceLocator",
    "ServiceLocator",
    "UnrecognisedResourceTypeError",
    "UnsupportedAuthProviderError",
    "classify_error",
    "create_service_locator",
    "resolve_client",
    "validate_resource_types",
]
