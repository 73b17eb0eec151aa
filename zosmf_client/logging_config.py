"""
Logging configuration for the z/OSMF client.

Provides centralized structured logging setup with JSON output for production
and human-readable output for development. Supports correlation IDs for
tracing one logical operation (such as a TSO session) across many requests.
"""

import logging
import sys
import uuid
from contextvars import ContextVar
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import structlog
from structlog.types import EventDict


# Context variable for correlation ID
correlation_id_var: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)

REDACTED = "****"

_SENSITIVE_HEADERS = frozenset({"authorization", "cookie"})


def add_correlation_id(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """
    Add correlation ID to log events if present in context.

    Args:
        logger: Logger instance
        method_name: Name of the logging method
        event_dict: Event dictionary to modify

    Returns:
        Modified event dictionary with correlation_id if available
    """
    correlation_id = correlation_id_var.get()
    if correlation_id:
        event_dict["correlation_id"] = correlation_id
    return event_dict


def set_correlation_id(correlation_id: Optional[str] = None) -> str:
    """
    Set correlation ID for the current context.

    Args:
        correlation_id: Optional correlation ID. If None, generates a new UUID.

    Returns:
        The correlation ID that was set
    """
    if correlation_id is None:
        correlation_id = str(uuid.uuid4())
    correlation_id_var.set(correlation_id)
    return correlation_id


def clear_correlation_id() -> None:
    """Clear correlation ID from the current context."""
    correlation_id_var.set(None)


def get_correlation_id() -> Optional[str]:
    """
    Get the current correlation ID from context.

    Returns:
        Current correlation ID or None if not set
    """
    return correlation_id_var.get()


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    json_format: bool = True,
) -> None:
    """
    Configure structured logging for the z/OSMF client.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to log file. If None, logs only to stderr.
        json_format: If True, use JSON format. If False, use human-readable format.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Clear existing handlers to avoid duplicates
    root_logger.handlers.clear()

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(file_handler)
    else:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setLevel(numeric_level)
        stderr_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(stderr_handler)

    processors: list = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        add_correlation_id,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.extend([
            structlog.dev.ConsoleRenderer(colors=True),
        ])

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance for a specific module.

    Module names already under the package are used as they are, so
    ``get_logger(__name__)`` and ``get_logger("rest.request")`` name the same
    logger.

    Args:
        name: Logger name (typically __name__ of the module).

    Returns:
        Structured logger instance.
    """
    if name != "zosmf_client" and not name.startswith("zosmf_client."):
        name = f"zosmf_client.{name}"
    return structlog.get_logger(name)


def redact_headers(headers: Mapping[str, str]) -> Dict[str, str]:
    """
    Return a copy of headers with credential-bearing values masked.

    Args:
        headers: Outbound request headers

    Returns:
        Headers safe to write to a log
    """
    return {
        key: (REDACTED if key.lower() in _SENSITIVE_HEADERS else value)
        for key, value in headers.items()
    }


# Convenience functions for common logging patterns

def log_zosmf_request(
    logger: structlog.stdlib.BoundLogger,
    method: str,
    url: str,
    headers: Mapping[str, str],
    auth_type: str,
    **kwargs: Any,
) -> None:
    """
    Log an outbound z/OSMF request.

    Args:
        logger: Logger instance
        method: HTTP method
        url: Target URL
        headers: Request headers (credentials are redacted)
        auth_type: Authentication mode of the connection ("classic", "token", "cert")
        **kwargs: Additional context to log
    """
    log_data: Dict[str, Any] = {
        "event_type": "zosmf_request",
        "method": method,
        "url": url,
        "headers": redact_headers(headers),
        "auth_type": auth_type,
    }

    log_data.update(kwargs)

    logger.debug("zosmf_request", **log_data)


def log_zosmf_response(
    logger: structlog.stdlib.BoundLogger,
    method: str,
    url: str,
    status_code: Optional[int],
    duration_ms: float,
    **kwargs: Any,
) -> None:
    """
    Log a z/OSMF reply.

    Args:
        logger: Logger instance
        method: HTTP method
        url: Target URL
        status_code: Reply status code, if any
        duration_ms: Round-trip duration in milliseconds
        **kwargs: Additional context to log
    """
    log_data: Dict[str, Any] = {
        "event_type": "zosmf_response",
        "method": method,
        "url": url,
        "status_code": status_code,
        "duration_ms": duration_ms,
    }

    log_data.update(kwargs)

    logger.debug("zosmf_response", **log_data)


def log_tso_exchange(
    logger: structlog.stdlib.BoundLogger,
    operation: str,
    servlet_key: Optional[str],
    success: bool,
    pending: int = 0,
    reason: Optional[str] = None,
    **kwargs: Any,
) -> None:
    """
    Log one step of a TSO session exchange.

    Args:
        logger: Logger instance
        operation: Session operation ("start", "send", "poll", "stop")
        servlet_key: Session handle, if known
        success: Whether the step reached a stable state
        pending: Number of pending messages reported by the reply
        reason: Failure or partial reason if not successful
        **kwargs: Additional context to log
    """
    log_data: Dict[str, Any] = {
        "event_type": "tso_exchange",
        "operation": operation,
        "servlet_key": servlet_key,
        "success": success,
        "pending": pending,
    }

    if reason is not None:
        log_data["reason"] = reason

    log_data.update(kwargs)

    if success:
        logger.info("tso_exchange", **log_data)
    else:
        logger.warning("tso_exchange", **log_data)
