"""
Structured request logging with PII sanitization.

This module provides request-scoped structured logging using structlog with:
- JSON output outside development
- Pretty console output for development
- Automatic redaction of tokens and email addresses
- Request ID and user ID correlation

Examples
--------
>>> from blogapp.monitoring import get_logger
>>> logger = get_logger("blogapp.routes.blogs")
>>> logger.info("Blog created", blog_id="123")
"""

from re import Pattern
from re import compile as re_compile
from typing import Any

from structlog import configure
from structlog import get_logger as struct_logger
from structlog.contextvars import bind_contextvars, clear_contextvars, merge_contextvars
from structlog.dev import ConsoleRenderer, RichTracebackFormatter
from structlog.processors import (
    JSONRenderer,
    StackInfoRenderer,
    TimeStamper,
    add_log_level,
    format_exc_info,
)
from structlog.stdlib import BoundLogger, LoggerFactory, add_logger_name, filter_by_level
from structlog.types import EventDict, Processor, WrappedLogger

from blogapp.configs.settings import settings

# Sensitive headers to redact
SENSITIVE_HEADERS: frozenset[str] = frozenset(
    {
        "authorization",
        "cookie",
        "proxy-authorization",
    },
)

# Order matters: JWTs contain dots and must be matched before emails
PII_PATTERNS: list[tuple[Pattern, str]] = [
    (re_compile(r"eyJ[a-zA-Z0-9_-]*\.eyJ[a-zA-Z0-9_-]*\.[a-zA-Z0-9_-]*"), "[REDACTED_JWT]"),
    (re_compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}"), "[REDACTED_EMAIL]"),
]

CONTROL_CHARS = str.maketrans({"\n": "\\n", "\r": "\\r", "\t": "\\t", "\x00": ""})


def sanitize_log_message(message: str) -> str:
    r"""
    Escape control characters to prevent log injection.

    Examples
    --------
    >>> sanitize_log_message("Hello\nWorld")
    'Hello\\nWorld'
    """
    return message.translate(CONTROL_CHARS)


def sanitize_headers(headers: dict[str, Any]) -> dict[str, Any]:
    """
    Return headers with sensitive values redacted.

    Examples
    --------
    >>> sanitize_headers({"Authorization": "Bearer token123", "Content-Type": "json"})
    {'Authorization': '[REDACTED]', 'Content-Type': 'json'}
    """
    return {k: "[REDACTED]" if k.lower() in SENSITIVE_HEADERS else v for k, v in headers.items()}


def redact_pii(message: str) -> str:
    """
    Redact tokens and email addresses from a log message.

    Examples
    --------
    >>> redact_pii("User user@example.com logged in")
    'User [REDACTED_EMAIL] logged in'
    """
    for pattern, replacement in PII_PATTERNS:
        message = pattern.sub(replacement, message)
    return message


def sanitize_event_dict(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Sanitize every string value and header mapping in the event."""
    for key, value in event_dict.items():
        if isinstance(value, str):
            event_dict[key] = redact_pii(sanitize_log_message(value))
        elif key.lower() == "headers" and isinstance(value, dict):
            event_dict[key] = sanitize_headers(value)
    return event_dict


def get_processors() -> list[Processor]:
    """
    Get the structlog processor chain for the current environment.

    Returns:
        Processors ending with a console renderer in development and a
        JSON renderer everywhere else.
    """
    processors: list[Processor] = [
        filter_by_level,
        merge_contextvars,
        add_logger_name,
        add_log_level,
        TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
        StackInfoRenderer(),
        format_exc_info,
        sanitize_event_dict,
    ]

    if settings.ENVIRONMENT == "development":
        processors.append(
            ConsoleRenderer(pad_level=False, exception_formatter=RichTracebackFormatter()),
        )
    else:
        processors.append(JSONRenderer())

    return processors


def configure_structlog() -> None:
    """Configure structlog to emit through the standard library loggers."""
    configure(
        processors=get_processors(),
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: The name of the logger (typically __name__).

    Returns:
        Configured structlog BoundLogger instance.
    """
    return struct_logger(name)


def bind_request_id(request_id: str) -> None:
    """Bind request ID to the current logging context."""
    bind_contextvars(request_id=request_id)


def set_user_id(user_id: str) -> None:
    """Bind the authenticated user's ID to the current logging context."""
    bind_contextvars(user_id=user_id)


def clear_context() -> None:
    """Clear all bound context variables."""
    clear_contextvars()
