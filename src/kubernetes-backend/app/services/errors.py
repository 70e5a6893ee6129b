"""Backend exceptions and list-call error classification."""

from __future__ import annotations

from typing import Any

from shared.models import FetchError, FetchErrorType


class KubernetesBackendError(Exception):
    """Base class for errors raised by the Kubernetes backend."""


class UnrecognisedResourceTypeError(KubernetesBackendError, ValueError):
    """Raised when a fetch names a resource type the backend cannot list."""

    def __init__(self, type_name: Any):
        self.type_name = type_name
        super().__init__(f"unrecognised type={type_name}")


class UnsupportedAuthProviderError(KubernetesBackendError):
    """Raised when a cluster uses an auth provider with no client support."""


class ConfigurationError(KubernetesBackendError):
    """Raised when backend settings cannot be turned into a working setup."""


# Status codes mapped onto a dedicated error type; everything else is unknown.
STATUS_ERROR_TYPES: dict[int, FetchErrorType] = {
    401: FetchErrorType.UNAUTHORIZED_ERROR,
    500: FetchErrorType.SYSTEM_ERROR,
}

# Attribute chains tried in order, first usable value wins.
# kubernetes ApiException, httpx errors, then plain nested dicts.
_STATUS_CODE_PATHS: tuple[tuple[str, ...], ...] = (
    ("status",),
    ("response", "status_code"),
    ("response", "statusCode"),
    ("response", "status"),
)
_RESOURCE_PATH_PATHS: tuple[tuple[str, ...], ...] = (
    ("request", "url", "path"),
    ("response", "request", "url", "path"),
    ("response", "request", "uri", "pathname"),
)


def _dig(value: Any, path: tuple[str, ...]) -> Any:
    """Follow ``path`` through attributes or mapping keys, None if it breaks."""
    for name in path:
        if value is None:
            return None
        try:
            if isinstance(value, dict):
                value = value.get(name)
            else:
                value = getattr(value, name, None)
        except Exception:
            # httpx raises RuntimeError for a response without a request
            return None
    return value


def _first(error: Any, paths: tuple[tuple[str, ...], ...], kind: type) -> Any:
    for path in paths:
        value = _dig(error, path)
        if isinstance(value, kind) and not isinstance(value, bool):
            return value
    return None


def classify_error(error: Any, fallback_path: str | None = None) -> FetchError:
    """Turn a failed list call into a FetchError.

    Never raises: an error without a status code is UNKNOWN_ERROR with
    ``status_code=None``, an error without a request path gets
    ``fallback_path``.

    Args:
        error: Exception (or error-shaped value) raised by the list call
        fallback_path: API path reported when the error carries none

    Returns:
        FetchError describing the failure
    """
    status_code = _first(error, _STATUS_CODE_PATHS, int)
    resource_path = _first(error, _RESOURCE_PATH_PATHS, str) or fallback_path

    return FetchError(
        error_type=STATUS_ERROR_TYPES.get(status_code, FetchErrorType.UNKNOWN_ERROR),
        resource_path=resource_path,
        status_code=status_code,
    )
