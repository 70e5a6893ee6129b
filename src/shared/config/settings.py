"""Configuration management with Pydantic Settings.

Environment variables are loaded from:
1. Environment variables (highest priority)
2. .env file (development)
3. Defaults (lowest priority)
"""

from enum import Enum
from functools import lru_cache

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Deployment environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class LogLevel(str, Enum):
    """Logging level."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Logging format."""

    JSON = "json"
    TEXT = "text"


class ServiceLocatorMethod(str, Enum):
    """How a service id is mapped onto the clusters that may run it."""

    MULTI_TENANT = "multiTenant"  # every service may run on every cluster


class ClusterSettings(BaseModel):
    """A statically configured cluster.

    Loaded as JSON from KUBERNETES_CLUSTERS, e.g.
    ``[{"name": "prod-1", "url": "https://k8s.example.com:6443",
    "service_account_token": "..."}]``
    """

    name: str = Field(description="Cluster name, unique within the backend")
    url: str = Field(description="Kubernetes API server URL")
    service_account_token: str | None = Field(
        default=None,
        description="Bearer token of the service account used for listing",
    )
    auth_provider: str = Field(default="serviceAccount", description="Auth provider tag")
    skip_tls_verify: bool = Field(default=False, description="Skip TLS verification")
    ca_data: str | None = Field(default=None, description="Base64 CA bundle")


class Settings(BaseSettings):
    """Main application settings.

    All settings can be overridden via environment variables.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Application metadata
    app_name: str = Field(default="kubernetes-backend", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        alias="ENV",
        description="Deployment environment",
    )

    # Logging configuration
    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")
    log_format: LogFormat = Field(default=LogFormat.JSON, description="Logging format")

    # Server configuration
    host: str = Field(default="0.0.0.0", description="Server bind host")
    port: int = Field(default=8080, description="Server bind port")
    workers: int = Field(default=1, description="Number of worker processes")
    debug: bool = Field(default=False, description="Enable debug mode")

    @field_validator("workers")
    @classmethod
    def validate_workers(cls, v: int) -> int:
        """Ensure workers is at least 1."""
        return max(1, v)

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == Environment.PRODUCTION


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses LRU cache to avoid re-parsing environment variables.
    """
    return Settings()


class KubernetesBackendSettings(Settings):
    """Settings specific to the Kubernetes backend service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    service_locator_method: ServiceLocatorMethod = Field(
        default=ServiceLocatorMethod.MULTI_TENANT,
        description="Strategy mapping a service id to clusters",
    )
    service_id_label: str = Field(
        default="backstage.io/kubernetes-id",
        description="Label key that tags objects with their owning service id",
    )
    clusters: list[ClusterSettings] = Field(
        default_factory=list,
        alias="KUBERNETES_CLUSTERS",
        description="Clusters to query",
    )
    object_types: list[str] | None = Field(
        default=None,
        alias="KUBERNETES_OBJECT_TYPES",
        description="Resource types fetched when a request names none (all if unset)",
    )


@lru_cache
def get_backend_settings() -> KubernetesBackendSettings:
    """Get cached Kubernetes backend settings."""
    return KubernetesBackendSettings()
