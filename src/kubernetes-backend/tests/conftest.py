"""Test fixtures for the Kubernetes backend."""

import os
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Set test environment before importing settings
os.environ["ENV"] = "development"
os.environ["LOG_LEVEL"] = "DEBUG"
os.environ["LOG_FORMAT"] = "text"

from shared.models import ClusterDetails  # noqa: E402


@pytest.fixture
def cluster_details() -> ClusterDetails:
    return ClusterDetails(
        name="cluster1",
        url="http://localhost:9999",
        service_account_token="token",
        auth_provider="serviceAccount",
    )


@pytest.fixture
def client_mock() -> MagicMock:
    """One client serving every list operation."""
    client = MagicMock()
    client.list_pod_for_all_namespaces = AsyncMock()
    client.list_service_for_all_namespaces = AsyncMock()
    client.list_config_map_for_all_namespaces = AsyncMock()
    client.list_deployment_for_all_namespaces = AsyncMock()
    client.list_replica_set_for_all_namespaces = AsyncMock()
    client.list_horizontal_pod_autoscaler_for_all_namespaces = AsyncMock()
    client.list_ingress_for_all_namespaces = AsyncMock()
    return client


@pytest.fixture
def client_provider(client_mock) -> MagicMock:
    """Client provider handing out ``client_mock`` for every category."""
    provider = MagicMock()
    provider.get_core_client_by_cluster_details = MagicMock(return_value=client_mock)
    provider.get_apps_client_by_cluster_details = MagicMock(return_value=client_mock)
    provider.get_autoscaling_client_by_cluster_details = MagicMock(return_value=client_mock)
    provider.get_networking_client_by_cluster_details = MagicMock(return_value=client_mock)
    return provider


@pytest.fixture
def fetcher(client_provider):
    from app.services.fetcher import KubernetesClientBasedFetcher

    return KubernetesClientBasedFetcher(client_provider)


@pytest.fixture
def backend_settings():
    from shared.config import ClusterSettings, KubernetesBackendSettings

    return KubernetesBackendSettings(
        clusters=[
            ClusterSettings(
                name="cluster1",
                url="http://localhost:9999",
                service_account_token="token",
            ),
            ClusterSettings(
                name="cluster2",
                url="http://localhost:9998",
                service_account_token="other-token",
            ),
        ],
    )


@pytest_asyncio.fixture
async def test_client(backend_settings, client_provider) -> AsyncGenerator[AsyncClient, None]:
    """Create test HTTP client."""
    from app.main import app, build_fanout_handler
    from app.services.service_locator import ConfigClusterLocator

    # Override app state
    cluster_locator = ConfigClusterLocator.from_settings(backend_settings.clusters)
    app.state.cluster_locator = cluster_locator
    app.state.fanout_handler = build_fanout_handler(
        backend_settings, client_provider, cluster_locator
    )

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
