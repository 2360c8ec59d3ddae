"""
Structured logging for the blog API.

Usage
-----
>>> from blogapp.monitoring import get_logger, bind_request_id
>>> bind_request_id("abc-123")
>>> get_logger(__name__).info("Processing request")
"""

from blogapp.monitoring.logging import (
    bind_request_id,
    clear_context,
    configure_structlog,
    get_logger,
    redact_pii,
    sanitize_headers,
    sanitize_log_message,
    set_user_id,
)

__all__ = [
    "bind_request_id",
    "clear_context",
    "configure_structlog",
    "get_logger",
    "redact_pii",
    "sanitize_headers",
    "sanitize_log_message",
    "set_user_id",
]
