"""Tests for the Kubernetes backend HTTP API."""

from unittest.mock import AsyncMock, patch

import httpx
import pytest
from httpx import AsyncClient

POD = {"metadata": {"name": "pod-name"}}


@pytest.mark.asyncio
async def test_health_endpoint(test_client: AsyncClient):
    """Test health endpoint returns healthy status."""
    response = await test_client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_ready_with_clusters(test_client: AsyncClient):
    """Test readiness reports configured clusters."""
    response = await test_client.get("/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ready", "checks": {"clusters": True}}


@pytest.mark.asyncio
async def test_list_clusters_hides_credentials(test_client: AsyncClient):
    """Test cluster listing never returns tokens."""
    response = await test_client.get("/api/v1/clusters")
    assert response.status_code == 200

    data = response.json()
    assert data == [
        {"name": "cluster1", "url": "http://localhost:9999"},
        {"name": "cluster2", "url": "http://localhost:9998"},
    ]
    assert "token" not in response.text


@pytest.mark.asyncio
async def test_get_service_objects(test_client: AsyncClient, client_mock):
    """Test objects and errors are returned per cluster in camelCase."""
    request = httpx.Request("GET", "http://localhost:9999/api/v1/services")
    client_mock.list_pod_for_all_namespaces.return_value = {"body": {"items": [POD]}}
    client_mock.list_service_for_all_namespaces.side_effect = httpx.HTTPStatusError(
        "boom", request=request, response=httpx.Response(500, request=request)
    )

    response = await test_client.post(
        "/api/v1/services/some-service",
        json={"objectTypes": ["services", "pods"]},
    )
    assert response.status_code == 200

    items = response.json()["items"]
    assert [item["cluster"]["name"] for item in items] == ["cluster1", "cluster2"]
    assert items[0]["resources"] == [{"type": "pods", "resources": [POD]}]
    assert items[0]["errors"] == [
        {
            "errorType": "SYSTEM_ERROR",
            "resourcePath": "/api/v1/services",
            "statusCode": 500,
        }
    ]
    client_mock.list_pod_for_all_namespaces.assert_called_with(
        label_selector="backstage.io/kubernetes-id=some-service"
    )


@pytest.mark.asyncio
async def test_get_service_objects_without_body(test_client: AsyncClient, client_mock):
    """Test omitting the body fetches every supported type."""
    for name in dir(client_mock):
        if name.startswith("list_"):
            getattr(client_mock, name).return_value = {"body": {"items": []}}

    response = await test_client.post("/api/v1/services/some-service")
    assert response.status_code == 200

    types = [r["type"] for r in response.json()["items"][0]["resources"]]
    assert types == [
        "pods",
        "services",
        "configmaps",
        "deployments",
        "replicasets",
        "horizontalpodautoscalers",
        "ingresses",
    ]


@pytest.mark.asyncio
async def test_get_service_objects_unknown_type(test_client: AsyncClient, client_provider):
    """Test an unrecognised type returns 400 without touching clusters."""
    response = await test_client.post(
        "/api/v1/services/some-service",
        json={"objectTypes": ["pods", "foo"]},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == {
        "error": "UNRECOGNISED_TYPE",
        "message": "unrecognised type=foo",
    }
    assert client_provider.get_core_client_by_cluster_details.call_count == 0


@pytest.mark.asyncio
async def test_request_id_is_echoed(test_client: AsyncClient):
    """Test the request id header is propagated to the response."""
    response = await test_client.get(
        "/api/v1/clusters", headers={"x-request-id": "req-123"}
    )
    assert response.headers["x-request-id"] == "req-123"


@pytest.mark.asyncio
async def test_lifespan_shares_locator_and_closes_clients():
    """Test startup builds one cluster locator and shutdown closes the clients."""
    from app.main import app, lifespan

    with patch("app.main.KubernetesClientProvider") as provider_cls:
        provider_cls.return_value.close = AsyncMock()

        async with lifespan(app):
            locator = app.state.fanout_handler.service_locator
            assert locator.cluster_locator is app.state.cluster_locator
            provider_cls.return_value.close.assert_not_awaited()

        provider_cls.assert_called_once_with()
        provider_cls.return_value.close.assert_awaited_once_with()
