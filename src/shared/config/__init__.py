"""Configuration management module.

This module provides:
- Environment-based configuration with validation
- Service-specific settings classes
- Cached settings access via get_settings()
"""

from .settings import (
    ClusterSettings,
    Environment,
    KubernetesBackendSettings,
    LogFormat,
    LogLevel,
    ServiceLocatorMethod,
    Settings,
    get_backend_settings,
    get_settings,
)

__all__ = [
    # Main settings
    "Settings",
    "get_settings",
    # Enums
    "Environment",
    "LogLevel",
    "LogFormat",
    "ServiceLocatorMethod",
    # Service-specific settings
    "ClusterSettings",
    "KubernetesBackendSettings",
    "get_backend_settings",
]
