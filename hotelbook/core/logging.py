"""
Logging Configuration and Utilities

Wires the stdlib logging dictConfig and structlog together, and exposes a
request-aware logger adapter used across services and middleware.
"""

import logging
import logging.config
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Optional

import structlog

from hotelbook.config.logging import build_logging_config
from hotelbook.config.settings import settings

# Context variables for request tracking
request_id_ctx: ContextVar[Optional[str]] = ContextVar('request_id', default=None)

_configured = False


class RequestContextProcessor:
    """Add request context to structlog event dicts"""

    def __call__(self, logger, method_name, event_dict):
        req_id = request_id_ctx.get()
        if req_id:
            event_dict['request_id'] = req_id

        event_dict['timestamp'] = datetime.now(timezone.utc).isoformat()
        event_dict['service'] = 'hotel-booking'
        event_dict['environment'] = settings.ENVIRONMENT

        return event_dict


class SensitiveDataProcessor:
    """Mask guest contact details in structured events"""

    sensitive_keys = ('guest_email', 'guest_phone', 'password', 'token', 'secret')

    def __call__(self, logger, method_name, event_dict):
        for key in list(event_dict.keys()):
            if any(sensitive in key.lower() for sensitive in self.sensitive_keys):
                event_dict[key] = '[REDACTED]'
        return event_dict


class LoggerAdapter:
    """Logger adapter that stamps the current request ID on every record"""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def _log(self, level: int, message: str, *args, **kwargs):
        extra = dict(kwargs.get('extra') or {})
        req_id = request_id_ctx.get()
        if req_id and 'request_id' not in extra:
            extra['request_id'] = req_id
        kwargs['extra'] = extra

        self.logger.log(level, message, *args, **kwargs)

    def debug(self, message: str, *args, **kwargs):
        self._log(logging.DEBUG, message, *args, **kwargs)

    def info(self, message: str, *args, **kwargs):
        self._log(logging.INFO, message, *args, **kwargs)

    def warning(self, message: str, *args, **kwargs):
        self._log(logging.WARNING, message, *args, **kwargs)

    def error(self, message: str, *args, **kwargs):
        self._log(logging.ERROR, message, *args, **kwargs)


def configure_structured_logging() -> None:
    """Configure structlog to render through the stdlib handlers"""
    processors = [
        structlog.contextvars.merge_contextvars,
        RequestContextProcessor(),
        SensitiveDataProcessor(),
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.LOG_FORMAT == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.processors.KeyValueRenderer(key_order=['event']))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )


def setup_logging() -> None:
    """Initialize logging configuration once per process"""
    global _configured
    if _configured:
        return

    logging.config.dictConfig(build_logging_config())
    configure_structured_logging()
    _configured = True

    get_logger(__name__).info(
        "Logging system initialized",
        extra={'log_level': settings.LOG_LEVEL, 'log_format': settings.LOG_FORMAT},
    )


def get_logger(name: Optional[str] = None) -> LoggerAdapter:
    """
    Get configured logger instance.

    Args:
        name: Logger name (defaults to the package logger)

    Returns:
        Enhanced logger adapter
    """
    return LoggerAdapter(logging.getLogger(name or 'hotelbook'))


def get_audit_logger(name: str = 'hotelbook.audit'):
    """Structured logger for booking lifecycle events"""
    return structlog.get_logger(name)


__all__ = [
    'get_logger',
    'get_audit_logger',
    'setup_logging',
    'LoggerAdapter',
    'request_id_ctx',
]
