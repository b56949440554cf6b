"""
Logging configuration for the AccessLanka assistant backend.

structlog renders on top of the stdlib root logger: JSON lines in
production, coloured console output when DEBUG is on.
"""

import logging
import sys
import time
import structlog
from structlog.stdlib import LoggerFactory

from core.config import settings

# Third-party loggers that drown out chatbot events at INFO/DEBUG
NOISY_LOGGERS = ("aiosqlite", "sqlalchemy.engine", "uvicorn.access")


def _renderer():
    if settings.DEBUG:
        return structlog.dev.ConsoleRenderer()
    return structlog.processors.JSONRenderer()


def setup_logging() -> structlog.stdlib.BoundLogger:
    """Configure structlog and the root logger, and Sentry when a DSN is set."""

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            _renderer(),
        ],
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper()))
    root_logger.handlers.clear()

    # structlog has already rendered the line
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger = structlog.get_logger()

    if settings.SENTRY_DSN and settings.SENTRY_DSN.strip():
        import sentry_sdk
        from sentry_sdk.integrations.fastapi import FastApiIntegration
        from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

        sentry_sdk.init(
            dsn=settings.SENTRY_DSN,
            environment=settings.SENTRY_ENVIRONMENT,
            integrations=[FastApiIntegration(), SqlalchemyIntegration()],
            traces_sample_rate=0.1 if settings.ENV == "production" else 1.0,
        )
        logger.info("Sentry integration enabled", environment=settings.SENTRY_ENVIRONMENT)

    return logger


def get_logger(name: str = None) -> structlog.stdlib.BoundLogger:
    """Get a logger instance."""
    return structlog.get_logger(name)


async def log_request_middleware(request, call_next):
    """Log each request once it completes, with its latency."""
    logger = get_logger("request")
    started = time.perf_counter()

    response = await call_next(request)

    logger.info(
        "Request completed",
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        duration_ms=round((time.perf_counter() - started) * 1000, 1),
        client_ip=request.client.host if request.client else None,
    )
    return response
