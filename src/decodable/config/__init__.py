from __future__ import annotations

from .settings import (
    DecodableLoggingConfig,
    DecodableSettings,
    DecodingConfig,
    load_decodable_settings,
    setup_logging_from_settings,
)

__all__ = [
    "DecodableLoggingConfig",
    "DecodableSettings",
    "DecodingConfig",
    "load_decodable_settings",
    "setup_logging_from_settings",
]
