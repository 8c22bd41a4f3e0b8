"""
Application factory.

Builds the FastAPI application hosting the API routes: configuration on
``app.state``, logging, exception handlers and the optional request logging
middleware. Routes themselves are added by the caller.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI

from snapd_api.core.common.logging_utils import (
    RequestLoggingMiddleware,
    configure_logging,
)
from snapd_api.core.config.app_config import AppConfig
from snapd_api.core.transport.fastapi.exception_adapters import (
    register_exception_handlers,
)

logger = logging.getLogger(__name__)


def build_app(config: AppConfig | None = None, *, setup_logging: bool = True) -> FastAPI:
    """Create the FastAPI application.

    Args:
        config: Application configuration; loaded from the environment when
            not given
        setup_logging: Whether to configure process-wide logging

    Returns:
        The configured FastAPI application
    """
    config = config or AppConfig.from_env()
    if setup_logging:
        configure_logging(config.logging)

    app = FastAPI()
    app.state.config = config

    register_exception_handlers(app)

    if config.logging.request_logging:
        app.middleware("http")(RequestLoggingMiddleware(request_logging=True))

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Built application (stream buffer %d bytes)",
            config.responses.stream_buffer_size,
        )
    return app
