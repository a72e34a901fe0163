"""
Structured logging for the payment intent service.

Every log line is a structlog event; request-scoped fields (request id,
method, path) are bound through structlog.contextvars by the request
middleware and merged into each event logged while serving that request.
"""

import logging
import os
import sys

import structlog
from opentelemetry.instrumentation.logging import LoggingInstrumentor

_configured = False


class BusinessEvents:
    """Event names used across the service"""

    API_REQUEST = "api.request"
    API_RESPONSE = "api.response"
    PAYMENT_ATTEMPT = "payment.attempt"
    PAYMENT_SUCCESS = "payment.success"
    PAYMENT_FAILURE = "payment.failure"
    PAYMENT_REJECTED = "payment.rejected"
    METHOD_NOT_ALLOWED = "payment.method_not_allowed"


def get_log_level():
    return os.getenv("LOG_LEVEL", "INFO").upper()


def get_log_renderer():
    """JSON outside local development, coloured console output otherwise."""
    if os.getenv("ENVIRONMENT", "development") in ("test", "production"):
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=True, sort_keys=False)


def configure_logging():
    """Configure structlog over stdlib logging. Later calls are no-ops."""
    global _configured
    if _configured:
        return

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            get_log_renderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    stream = sys.stdout if os.getenv("ENVIRONMENT") == "test" else sys.stderr
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter("%(message)s"))

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(get_log_level())

    # uvicorn's own handlers would print every line twice
    for name in ("uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).handlers.clear()

    # Adds trace and span ids to stdlib records
    LoggingInstrumentor().instrument(set_logging_format=False)
    _configured = True


configure_logging()
