"""Unit tests for settings loading."""

import json

import pytest
from pydantic import ValidationError

from shared.config import (
    Environment,
    KubernetesBackendSettings,
    LogLevel,
    ServiceLocatorMethod,
)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove backend variables that may leak in from the shell."""
    for name in ("KUBERNETES_CLUSTERS", "KUBERNETES_OBJECT_TYPES", "SERVICE_ID_LABEL"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestKubernetesBackendSettings:
    """Test backend settings."""

    def test_defaults(self, clean_env) -> None:
        settings = KubernetesBackendSettings(_env_file=None)

        assert settings.service_locator_method == ServiceLocatorMethod.MULTI_TENANT
        assert settings.service_id_label == "backstage.io/kubernetes-id"
        assert settings.clusters == []
        assert settings.object_types is None

    def test_clusters_from_json_env(self, clean_env) -> None:
        """Test clusters are parsed from a JSON array."""
        clean_env.setenv(
            "KUBERNETES_CLUSTERS",
            json.dumps(
                [
                    {
                        "name": "prod-1",
                        "url": "https://k8s.example.com:6443",
                        "service_account_token": "secret",
                    },
                    {"name": "prod-2", "url": "https://k8s-2.example.com", "skip_tls_verify": True},
                ]
            ),
        )

        settings = KubernetesBackendSettings(_env_file=None)

        assert [c.name for c in settings.clusters] == ["prod-1", "prod-2"]
        assert settings.clusters[0].service_account_token == "secret"
        assert settings.clusters[0].auth_provider == "serviceAccount"
        assert settings.clusters[1].skip_tls_verify is True

    def test_object_types_from_env(self, clean_env) -> None:
        clean_env.setenv("KUBERNETES_OBJECT_TYPES", '["pods", "services"]')

        settings = KubernetesBackendSettings(_env_file=None)

        assert settings.object_types == ["pods", "services"]

    def test_environment_alias(self, clean_env) -> None:
        clean_env.setenv("ENV", "production")
        clean_env.setenv("LOG_LEVEL", "WARNING")

        settings = KubernetesBackendSettings(_env_file=None)

        assert settings.environment == Environment.PRODUCTION
        assert settings.is_production
        assert settings.log_level == LogLevel.WARNING

    def test_unknown_locator_method_rejected(self, clean_env) -> None:
        clean_env.setenv("SERVICE_LOCATOR_METHOD", "singleTenant")

        with pytest.raises(ValidationError):
            KubernetesBackendSettings(_env_file=None)

    def test_workers_minimum(self, clean_env) -> None:
        clean_env.setenv("WORKERS", "0")

        assert KubernetesBackendSettings(_env_file=None).workers == 1
