"""Typed Kubernetes API clients built from cluster connection details."""

from __future__ import annotations

import asyncio
import base64
import tempfile
from pathlib import Path
from typing import Any, Protocol

from kubernetes import client

from shared.models import ClientCategory, ClusterDetails
from shared.observability import get_logger

from .errors import UnsupportedAuthProviderError

logger = get_logger(__name__)

SERVICE_ACCOUNT_AUTH_PROVIDER = "serviceAccount"

API_CLASSES: dict[ClientCategory, type] = {
    ClientCategory.CORE: client.CoreV1Api,
    ClientCategory.APPS: client.AppsV1Api,
    ClientCategory.AUTOSCALING: client.AutoscalingV1Api,
    ClientCategory.NETWORKING: client.NetworkingV1Api,
}

# Provider method resolving each category; the fetcher dispatches through it.
PROVIDER_METHODS: dict[ClientCategory, str] = {
    ClientCategory.CORE: "get_core_client_by_cluster_details",
    ClientCategory.APPS: "get_apps_client_by_cluster_details",
    ClientCategory.AUTOSCALING: "get_autoscaling_client_by_cluster_details",
    ClientCategory.NETWORKING: "get_networking_client_by_cluster_details",
}


class ClientProvider(Protocol):
    """Anything able to hand out one typed client per category."""

    def get_core_client_by_cluster_details(self, cluster: ClusterDetails) -> Any: ...

    def get_apps_client_by_cluster_details(self, cluster: ClusterDetails) -> Any: ...

    def get_autoscaling_client_by_cluster_details(self, cluster: ClusterDetails) -> Any: ...

    def get_networking_client_by_cluster_details(self, cluster: ClusterDetails) -> Any: ...


def resolve_client(
    provider: ClientProvider,
    cluster: ClusterDetails,
    category: ClientCategory,
) -> Any:
    """Resolve the client of ``category`` through ``provider``."""
    return getattr(provider, PROVIDER_METHODS[ClientCategory(category)])(cluster)


class KubernetesClientProvider:
    """Builds isolated kubernetes API clients per cluster.

    One ApiClient is kept per cluster and shared by its typed APIs; the
    process-wide kubeconfig is never loaded or mutated, so concurrent
    fetches against different clusters cannot leak credentials into each
    other. Call ``close()`` on shutdown to release connection pools and
    CA files.
    """

    def __init__(self):
        self._api_clients: dict[ClusterDetails, client.ApiClient] = {}
        self._ca_files: dict[str, str] = {}

    def _get_configuration(self, cluster: ClusterDetails) -> client.Configuration:
        """Build a client configuration for the cluster."""
        if cluster.auth_provider != SERVICE_ACCOUNT_AUTH_PROVIDER:
            raise UnsupportedAuthProviderError(
                f"Unsupported auth provider '{cluster.auth_provider}' "
                f"for cluster '{cluster.name}'"
            )

        configuration = client.Configuration()
        configuration.host = cluster.url.rstrip("/")
        configuration.verify_ssl = not cluster.skip_tls_verify

        if cluster.service_account_token:
            configuration.api_key = {"authorization": cluster.service_account_token}
            configuration.api_key_prefix = {"authorization": "Bearer"}

        if cluster.ca_data:
            configuration.ssl_ca_cert = self._get_ca_file(cluster.ca_data)

        return configuration

    def _get_ca_file(self, ca_data: str) -> str:
        """Write the base64 CA bundle to a file the TLS layer can read, once."""
        if ca_data not in self._ca_files:
            with tempfile.NamedTemporaryFile(
                mode="wb", prefix="k8s-ca-", suffix=".crt", delete=False
            ) as ca_file:
                ca_file.write(base64.b64decode(ca_data))
            self._ca_files[ca_data] = ca_file.name
        return self._ca_files[ca_data]

    def get_api_client(self, cluster: ClusterDetails) -> client.ApiClient:
        """Get the low-level ApiClient for the cluster, creating it on first use."""
        api_client = self._api_clients.get(cluster)
        if api_client is None:
            logger.debug("Creating Kubernetes API client", cluster=cluster.name)
            api_client = client.ApiClient(self._get_configuration(cluster))
            self._api_clients[cluster] = api_client
        return api_client

    async def close(self) -> None:
        """Close every cached ApiClient and remove the CA files."""
        api_clients = list(self._api_clients.values())
        ca_files = list(self._ca_files.values())
        self._api_clients.clear()
        self._ca_files.clear()

        for api_client in api_clients:
            await asyncio.to_thread(api_client.close)
        for path in ca_files:
            Path(path).unlink(missing_ok=True)

        logger.debug(
            "Closed Kubernetes API clients",
            clients=len(api_clients),
            ca_files=len(ca_files),
        )

    def get_client_by_cluster_details(
        self,
        cluster: ClusterDetails,
        category: ClientCategory,
    ) -> Any:
        """Create the typed API client serving ``category``."""
        return resolve_client(self, cluster, category)

    def get_core_client_by_cluster_details(self, cluster: ClusterDetails) -> client.CoreV1Api:
        return API_CLASSES[ClientCategory.CORE](self.get_api_client(cluster))

    def get_apps_client_by_cluster_details(self, cluster: ClusterDetails) -> client.AppsV1Api:
        return API_CLASSES[ClientCategory.APPS](self.get_api_client(cluster))

    def get_autoscaling_client_by_cluster_details(
        self, cluster: ClusterDetails
    ) -> client.AutoscalingV1Api:
        return API_CLASSES[ClientCategory.AUTOSCALING](self.get_api_client(cluster))

    def get_networking_client_by_cluster_details(
        self, cluster: ClusterDetails
    ) -> client.NetworkingV1Api:
        return API_CLASSES[ClientCategory.NETWORKING](self.get_api_client(cluster))
