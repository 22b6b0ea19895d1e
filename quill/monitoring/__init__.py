"""
Observability helpers for Quill.

Usage
-----
>>> from quill.monitoring import configure_logging, get_logger
>>> configure_logging()
>>> logger = get_logger(__name__)
"""

from quill.monitoring.logging import (
    bind_request_id,
    bind_user,
    clear_context,
    configure_logging,
    get_logger,
    get_request_id,
    redact_pii,
    sanitize_event_dict,
    sanitize_headers,
    sanitize_log_message,
)

__all__ = [
    "bind_request_id",
    "bind_user",
    "clear_context",
    "configure_logging",
    "get_logger",
    "get_request_id",
    "redact_pii",
    "sanitize_event_dict",
    "sanitize_headers",
    "sanitize_log_message",
]
