"""API routers for the Kubernetes backend."""

from . import clusters, health, services

__all__ = ["clusters", "health", "services"]
