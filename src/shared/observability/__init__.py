"""Observability module for structured logging."""

from .logging import (
    RequestContextManager,
    get_logger,
    log_list_call_end,
    log_list_call_start,
    log_request_end,
    log_request_start,
    request_id_var,
    service_id_var,
    setup_logging,
)

__all__ = [
    # Setup
    "setup_logging",
    "get_logger",
    # Context
    "RequestContextManager",
    "request_id_var",
    "service_id_var",
    # Logging helpers
    "log_request_start",
    "log_request_end",
    "log_list_call_start",
    "log_list_call_end",
]
