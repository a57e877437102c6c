from __future__ import annotations

import logging
from typing import Literal, TypedDict

from decodable.logging import LogFormat, LogLevel, setup_logging

from ._utils import _parse_bool, _parse_log_format, _parse_log_level, _parse_str


class DecodableLoggingConfig(TypedDict, total=True):
    """Logging configuration."""

    level: LogLevel
    format: LogFormat


class DecodingConfig(TypedDict, total=True):
    """Decoding defaults applied by the response helpers."""

    ignore_invalid_objects: bool


class DecodableSettings(TypedDict, total=True):
    """Configuration for services embedding decodable."""

    app_env: Literal["dev", "prod"]
    service_name: str
    logging: DecodableLoggingConfig
    decoding: DecodingConfig


def load_decodable_settings() -> DecodableSettings:
    """Load settings from environment variables.

    Environment variables:
        APP_ENV: Application environment (dev/prod, default: dev)
        SERVICE_NAME: Service name for JSON logs (default: decodable)
        LOGGING__LEVEL: Log level (default: INFO)
        LOGGING__FORMAT: Log format, json or text (default: text)
        DECODING__IGNORE_INVALID_OBJECTS: Drop undecodable list elements
            in response helpers (default: false)
    """
    app_env_raw = _parse_str("APP_ENV", "dev")
    app_env: Literal["dev", "prod"] = "prod" if app_env_raw.lower() == "prod" else "dev"

    logging_cfg: DecodableLoggingConfig = {
        "level": _parse_log_level("LOGGING__LEVEL", "INFO"),
        "format": _parse_log_format("LOGGING__FORMAT", "text"),
    }
    decoding_cfg: DecodingConfig = {
        "ignore_invalid_objects": _parse_bool("DECODING__IGNORE_INVALID_OBJECTS", False),
    }
    return {
        "app_env": app_env,
        "service_name": _parse_str("SERVICE_NAME", "decodable"),
        "logging": logging_cfg,
        "decoding": decoding_cfg,
    }


def setup_logging_from_settings(settings: DecodableSettings) -> logging.Logger:
    """Configure root logging from loaded settings."""
    return setup_logging(
        level=settings["logging"]["level"],
        format_mode=settings["logging"]["format"],
        service_name=settings["service_name"],
        instance_id=None,
        extra_fields=None,
    )


__all__ = [
    "DecodableLoggingConfig",
    "DecodableSettings",
    "DecodingConfig",
    "load_decodable_settings",
    "setup_logging_from_settings",
]
