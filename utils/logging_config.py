"""
Centralized logging configuration for the hCaptcha gate.

This module sets up structured logging with:
- Environment-based configuration (dev vs production)
- JSON formatting for production, pretty console for development
- IP hashing for GDPR compliance in production
- Redaction of captcha secrets and tokens
"""

import hashlib
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Optional

import structlog
from structlog.types import EventDict, Processor


# Environment configuration
ENV = os.getenv("ENV", "development")
IS_PRODUCTION = ENV == "production"

# Log level configuration
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO" if IS_PRODUCTION else "DEBUG")
LOG_FORMAT = os.getenv("LOG_FORMAT", "json" if IS_PRODUCTION else "console")

# Sensitive fields to redact from logs
REDACTED_FIELDS = {
    "secret",
    "response",
    "h-captcha-response",
    "token",
    "sitekey",
    "authorization",
    "cookie",
}

# Substrings that mark a key as sensitive
SENSITIVE_MARKERS = ("token", "secret", "key")

# Keys structlog itself emits
_PROTECTED_KEYS = {"level", "event", "timestamp", "logger"}


def hash_ip(ip_address: str) -> str:
    """
    Hash IP address for privacy in production.

    In production, returns SHA-256 hash (first 16 chars) for GDPR compliance.
    In development, returns the original IP for easier debugging.
    """
    if IS_PRODUCTION and ip_address:
        return hashlib.sha256(ip_address.encode()).hexdigest()[:16]
    return ip_address


def add_timestamp(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add ISO format timestamp to event dict."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def redact_sensitive_fields(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Redact secrets and captcha tokens from logs."""
    for key in list(event_dict.keys()):
        if key in _PROTECTED_KEYS:
            continue
        lowered = key.lower()
        if lowered in REDACTED_FIELDS or any(
            marker in lowered for marker in SENSITIVE_MARKERS
        ):
            event_dict[key] = "***REDACTED***"
    return event_dict


def configure_structlog(log_format: Optional[str] = None) -> None:
    """
    Configure structlog with appropriate processors for the environment.

    Production: JSON formatting for easy parsing
    Development: Pretty console formatting with colors
    """
    log_format = log_format or LOG_FORMAT

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_timestamp,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        redact_sensitive_fields,
        structlog.processors.format_exc_info,
    ]

    if log_format == "json":
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True, sort_keys=False)

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_stdlib_logging(log_level: Optional[str] = None) -> None:
    """
    Configure standard library logging to work with structlog.

    Sets up:
    - Log level from environment
    - Console handler for stdout
    - Format compatible with structlog
    """
    level = getattr(logging, (log_level or LOG_LEVEL).upper(), logging.INFO)
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )
    logging.getLogger().setLevel(level)

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def setup_logging(
    log_level: Optional[str] = None, log_format: Optional[str] = None
) -> None:
    """
    Initialize logging system for the application.

    Called on import with environment defaults, and again by create_app()
    with the values from LoggingSettings.
    """
    configure_stdlib_logging(log_level)
    configure_structlog(log_format)

    logger = structlog.get_logger(__name__)
    logger.info(
        "logging_initialized",
        env=ENV,
        log_level=log_level or LOG_LEVEL,
        log_format=log_format or LOG_FORMAT,
    )


# Initialize logging when module is imported
setup_logging()
