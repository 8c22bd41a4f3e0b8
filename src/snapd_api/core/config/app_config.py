from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator

from snapd_api.core.common.exceptions import ConfigurationError
from snapd_api.core.constants import DEFAULT_STREAM_BUFFER_SIZE
from snapd_api.core.interfaces.model_bases import DomainModel

logger = logging.getLogger(__name__)


def _str_to_bool(val: str | None, default: bool = False) -> bool:
    if val is None:
        return default
    val = val.strip().lower()
    if val in ("true", "1", "yes", "on"):
        return True
    if val in ("false", "0", "no", "off", "none"):
        return False
    return default


def _to_int(value: str, fallback: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return fallback


def _get_env_value(
    env: Mapping[str, str],
    name: str,
    default: Any,
    *,
    transform: Callable[[str], Any] | None = None,
) -> Any:
    """Return an environment variable value, transformed when a transform is given."""
    if name in env:
        raw_value = env[name]
        return transform(raw_value) if transform is not None else raw_value
    return default


class LogLevel(str, Enum):
    """Log levels for configuration."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LoggingConfig(DomainModel):
    """Logging configuration."""

    level: LogLevel = LogLevel.INFO
    request_logging: bool = False
    log_file: str | None = None


class ResponseConfig(DomainModel):
    """Configuration of the response encoders."""

    # Bytes buffered by the log streamer before a chunk is sent when not
    # following.
    stream_buffer_size: int = DEFAULT_STREAM_BUFFER_SIZE
    # Send Cache-Control/X-Accel-Buffering headers on follow streams so that
    # intermediaries do not hold back records.
    follow_keepalive_headers: bool = True

    @field_validator("stream_buffer_size")
    @classmethod
    def validate_stream_buffer_size(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("stream_buffer_size must be positive")
        return v


class AppConfig(DomainModel):
    """Complete application configuration."""

    host: str = "127.0.0.1"
    port: int = 8000

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    responses: ResponseConfig = Field(default_factory=ResponseConfig)

    @classmethod
    def from_env(cls, *, environ: Mapping[str, str] | None = None) -> AppConfig:
        """Create AppConfig from environment variables.

        Returns:
            AppConfig instance
        """
        env: Mapping[str, str] = os.environ if environ is None else environ
        return cls.model_validate(_env_overrides(env, cls()))


def _env_overrides(env: Mapping[str, str], base: AppConfig) -> dict[str, Any]:
    return {
        "host": _get_env_value(env, "APP_HOST", base.host),
        "port": _get_env_value(
            env, "APP_PORT", base.port, transform=lambda v: _to_int(v, base.port)
        ),
        "logging": {
            "level": _get_env_value(
                env, "LOG_LEVEL", base.logging.level, transform=str.upper
            ),
            "request_logging": _get_env_value(
                env,
                "REQUEST_LOGGING",
                base.logging.request_logging,
                transform=lambda v: _str_to_bool(v, base.logging.request_logging),
            ),
            "log_file": _get_env_value(env, "LOG_FILE", base.logging.log_file),
        },
        "responses": {
            "stream_buffer_size": _get_env_value(
                env,
                "STREAM_BUFFER_SIZE",
                base.responses.stream_buffer_size,
                transform=lambda v: _to_int(v, base.responses.stream_buffer_size),
            ),
            "follow_keepalive_headers": base.responses.follow_keepalive_headers,
        },
    }


def load_config(
    config_path: str | Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> AppConfig:
    """
    Load configuration from file and environment.

    Values from the YAML file override defaults; environment variables that
    are set override the file.

    Args:
        config_path: Optional path to a YAML configuration file
        environ: Optional environment mapping, defaults to os.environ

    Returns:
        AppConfig instance
    """
    env: Mapping[str, str] = os.environ if environ is None else environ
    file_config = AppConfig()

    if config_path:
        import yaml

        path = Path(config_path)
        if not path.exists():
            logger.warning("Configuration file not found: %s", config_path)
        else:
            if path.suffix.lower() not in (".yaml", ".yml"):
                raise ConfigurationError(
                    f"Unsupported configuration file format: {path.suffix}. Use YAML (.yaml/.yml)."
                )
            try:
                with open(path, encoding="utf-8") as f:
                    data: dict[str, Any] = yaml.safe_load(f) or {}
                file_config = AppConfig.model_validate(data)
            except Exception as exc:
                logger.critical("Error loading configuration file: %s", exc)
                raise ConfigurationError(
                    f"Error loading configuration: {exc}"
                ) from exc

    return AppConfig.model_validate(_env_overrides(env, file_config))
