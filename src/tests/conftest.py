"""Pytest configuration and shared fixtures."""

import os
from typing import Any

import pytest

# Set test environment before importing settings
os.environ["ENV"] = "development"
os.environ["LOG_LEVEL"] = "DEBUG"
os.environ["LOG_FORMAT"] = "text"


@pytest.fixture
def sample_cluster_data() -> dict[str, Any]:
    """Sample cluster data for testing."""
    return {
        "name": "test-cluster-01",
        "url": "https://api.test-cluster.example.com:6443",
        "serviceAccountToken": "test-bearer-token-12345",
        "authProvider": "serviceAccount",
    }


@pytest.fixture
def sample_fetch_result_data() -> dict[str, Any]:
    """Sample partial-success fetch result in wire format."""
    return {
        "responses": [
            {"type": "pods", "resources": [{"metadata": {"name": "pod-name"}}]},
        ],
        "errors": [
            {
                "errorType": "UNAUTHORIZED_ERROR",
                "resourcePath": "/some/path",
                "statusCode": 401,
            }
        ],
    }


# =============================================================================
# Markers
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line(
        "markers", "integration: Integration tests (require external services)"
    )
