"""
Logging utilities for the application.

Modules report response failures through plain ``logging`` loggers; the
request logging middleware and ad-hoc contexts use structlog bound loggers
routed through the same standard library handlers.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from snapd_api.core.config.app_config import LoggingConfig

DEFAULT_LOG_FORMAT = "%(asctime)s [%(levelname)-8s] [%(env_tag)s] %(name)s:%(lineno)d %(message)s"


def _is_running_under_pytest() -> bool:
    return "pytest" in sys.modules or os.getenv("PYTEST_CURRENT_TEST") is not None


def _get_environment_tag() -> str:
    """Get the environment tag for logging: 'test' under pytest, 'prod' otherwise."""
    return "test" if _is_running_under_pytest() else "prod"


class EnvironmentTaggingFilter(logging.Filter):
    """Logging filter that adds environment tags to log records."""

    def __init__(self) -> None:
        super().__init__()
        self._env_tag = _get_environment_tag()

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        record.env_tag = self._env_tag
        return True


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger.

    Args:
        name: Optional logger name

    Returns:
        A structured logger
    """
    return structlog.get_logger(name)  # type: ignore


def configure_logging(config: LoggingConfig) -> None:
    """Configure the root logger and structlog from the logging config.

    Args:
        config: The logging section of the application config
    """
    level = getattr(logging, config.level.value, logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.log_file:
        handlers.append(logging.FileHandler(config.log_file, encoding="utf-8"))

    tagging = EnvironmentTaggingFilter()
    formatter = logging.Formatter(DEFAULT_LOG_FORMAT)
    for handler in handlers:
        handler.addFilter(tagging)
        handler.setFormatter(formatter)

    logging.basicConfig(level=level, handlers=handlers, force=True)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.KeyValueRenderer(
                key_order=["event"], drop_missing=True
            ),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


class LogContext:
    """Context manager binding key/value context to a structured logger."""

    def __init__(self, logger: structlog.stdlib.BoundLogger, **context: Any):
        self.logger = logger
        self.context = context
        self.bound_logger: structlog.stdlib.BoundLogger | None = None

    def __enter__(self) -> structlog.stdlib.BoundLogger:
        self.bound_logger = self.logger.bind(**self.context)
        return self.bound_logger

    def __exit__(self, *args: Any) -> None:
        self.bound_logger = None


class RequestLoggingMiddleware:
    """Middleware for logging requests and the status of their responses."""

    def __init__(self, request_logging: bool = True):
        self.request_logging = request_logging
        self.logger = get_logger("snapd_api.requests")

    async def __call__(self, request: Any, call_next: Any) -> Any:
        start_time = datetime.now()
        client = request.client.host if request.client else "unknown"

        with LogContext(
            self.logger, method=request.method, path=request.url.path, client=client
        ) as log:
            if self.request_logging:
                log.info("Request received")

            try:
                response = await call_next(request)
            except Exception as e:
                duration = datetime.now() - start_time
                log.error(
                    "Request failed",
                    error=str(e),
                    error_type=type(e).__name__,
                    duration_ms=duration.total_seconds() * 1000,
                    exc_info=True,
                )
                raise

            if self.request_logging:
                duration = datetime.now() - start_time
                log.info(
                    "Response started",
                    status_code=response.status_code,
                    duration_ms=duration.total_seconds() * 1000,
                )
            return response
