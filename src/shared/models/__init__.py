"""Shared data models for the Kubernetes backend.

All models follow these conventions:
- Field names: lowercase snake_case, serialised as camelCase
- Enums: uppercase SNAKE_CASE members
"""

# Base
from .base import BackendBaseModel

# Kubernetes object fetching
from .kubernetes import (
    RESOURCE_TYPE_CATEGORIES,
    ClientCategory,
    ClusterDetails,
    ClusterObjects,
    ClusterSummary,
    FetchError,
    FetchErrorType,
    FetchRequest,
    ObjectsByServiceIdResponse,
    ResourceType,
    ServiceObjectsRequest,
    ServiceObjectsResponse,
    TypedResponse,
)

__all__ = [
    # Base
    "BackendBaseModel",
    # Kubernetes
    "RESOURCE_TYPE_CATEGORIES",
    "ClientCategory",
    "ClusterDetails",
    "ClusterObjects",
    "ClusterSummary",
    "FetchError",
    "FetchErrorType",
    "FetchRequest",
    "ObjectsByServiceIdResponse",
    "ResourceType",
    "ServiceObjectsRequest",
    "ServiceObjectsResponse",
    "TypedResponse",
]
