from __future__ import annotations

import logging
import socket
import sys
import time
from typing import Literal, Protocol

from decodable.json_utils import JSONValue, dump_json_str
from decodable.request_context import request_id_var

LogFormat = Literal["json", "text"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Structured fields emitted by the exception handlers.
_STANDARD_FIELDS = (
    "error_code",
    "error_type",
    "error_message",
    "path",
    "method",
)


class _OsModule(Protocol):
    """Protocol for os module to avoid Any from __import__."""

    def getpid(self) -> int: ...


class _MissingValue:
    """Sentinel for absent or invalid LogRecord attributes."""

    __slots__ = ()


_MISSING = _MissingValue()


def _get_json_record_value(record: logging.LogRecord, field_name: str) -> JSONValue | _MissingValue:
    """Fetch a record attribute and validate it is JSON-compatible."""
    record_mapping: dict[str, object] = record.__dict__
    if field_name not in record_mapping:
        return _MISSING
    raw_value = record_mapping[field_name]
    if isinstance(raw_value, (str, int, float, bool)) or raw_value is None:
        return raw_value
    return _MISSING


class JsonFormatter(logging.Formatter):
    """JSON formatter producing one structured object per record.

    Each record carries:
    - ISO8601 timestamp (UTC)
    - level, logger, message
    - static fields (service, instance_id)
    - request_id when bound in the current context
    - configured extra fields and the exception handler fields
    - exception info if present
    """

    def __init__(
        self,
        *,
        static_fields: dict[str, str],
        extra_field_names: list[str],
    ) -> None:
        super().__init__()
        self._static = static_fields
        self._extra_fields = extra_field_names

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, JSONValue] = {
            "timestamp": time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created)),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key in self._static:
            payload[key] = self._static[key]

        rid = request_id_var.get()
        if rid != "":
            payload["request_id"] = rid

        for field_name in (*self._extra_fields, *_STANDARD_FIELDS):
            if field_name in payload:
                continue
            field_value = _get_json_record_value(record, field_name)
            if isinstance(field_value, _MissingValue):
                continue
            payload[field_name] = field_value

        if record.exc_info is not None:
            payload["exc_info"] = self.formatException(record.exc_info)

        return dump_json_str(payload, compact=False)


class TextFormatter(logging.Formatter):
    """Human-readable text formatter for development.

    Format: [timestamp] [LEVEL] [logger] [extra_fields] message
    """

    def __init__(self, *, extra_fields: list[str]) -> None:
        super().__init__()
        self._extra_fields = extra_fields

    def format(self, record: logging.LogRecord) -> str:
        timestamp = self.formatTime(record, "%Y-%m-%d %H:%M:%S")
        parts: list[str] = [
            f"[{timestamp}]",
            f"[{record.levelname}]",
            f"[{record.name}]",
        ]

        for field_name in self._extra_fields:
            field_value = _get_json_record_value(record, field_name)
            if isinstance(field_value, _MissingValue):
                continue
            parts.append(f"{field_name}={field_value}")

        parts.append(record.getMessage())
        line = " ".join(parts)

        if record.exc_info is not None:
            line = line + "\n" + self.formatException(record.exc_info)

        return line


def _compute_instance_id() -> str:
    """Generate a stable instance ID from hostname and PID."""
    host = socket.gethostname().split(".")[0]
    os_mod = __import__("os")
    os_protocol: _OsModule = os_mod
    return f"{host}-{os_protocol.getpid()}"


def _level_to_int(level: LogLevel) -> int:
    level_map: dict[LogLevel, int] = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return level_map[level]


def setup_logging(
    *,
    level: LogLevel,
    format_mode: LogFormat,
    service_name: str,
    instance_id: str | None,
    extra_fields: list[str] | None,
) -> logging.Logger:
    """Configure the root logger with JSON or text output on stdout.

    Clears existing handlers so repeated calls leave exactly one handler.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_mode: "json" for production, "text" for development
        service_name: Service name to include in all JSON logs
        instance_id: Instance ID (derived from host and PID if None)
        extra_fields: Extra record attributes to emit (none if None)

    Returns:
        Configured root logger

    Example:
        >>> from decodable.logging import setup_logging
        >>> logger = setup_logging(
        ...     level="INFO",
        ...     format_mode="json",
        ...     service_name="orders-api",
        ...     instance_id=None,
        ...     extra_fields=None
        ... )
        >>> logger.info("decoders ready")
    """
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(_level_to_int(level))

    computed_instance_id = instance_id if instance_id is not None else _compute_instance_id()
    static_fields: dict[str, str] = {
        "service": service_name,
        "instance_id": computed_instance_id,
    }
    extra_field_names = extra_fields if extra_fields is not None else []

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG)
    if format_mode == "json":
        handler.setFormatter(
            JsonFormatter(static_fields=static_fields, extra_field_names=extra_field_names)
        )
    else:
        handler.setFormatter(TextFormatter(extra_fields=extra_field_names))
    root.addHandler(handler)

    # Silence noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    return root


# Expose stdlib logging module for typed test utilities.
stdlib_logging = logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance by name (typically __name__)."""
    return logging.getLogger(name)


__all__ = [
    "JsonFormatter",
    "LogFormat",
    "LogLevel",
    "TextFormatter",
    "get_logger",
    "setup_logging",
    "stdlib_logging",
]
