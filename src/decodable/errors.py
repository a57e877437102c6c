from __future__ import annotations

import logging
from enum import Enum
from typing import Generic, TypeVar

from decodable.json_utils import DecodeError, InvalidJsonError


class ErrorCodeBase(str, Enum):
    """Base class for error codes.

    This is a string enum where each member is both an Enum and a str.
    """

    value: str


class ErrorCode(ErrorCodeBase):
    """Error codes surfaced to HTTP callers."""

    INVALID_INPUT = "INVALID_INPUT"  # 400 - decoded value has the wrong shape
    INVALID_JSON = "INVALID_JSON"  # 400 - body is not JSON
    INTERNAL_ERROR = "INTERNAL_ERROR"  # 500


ErrorCodeType = TypeVar("ErrorCodeType", bound=ErrorCodeBase)


class AppError(Exception, Generic[ErrorCodeType]):
    """Application error with structured error code and HTTP status.

    Attributes:
        code: Machine-readable error code
        message: Human-readable error message
        http_status: HTTP status code to return

    Example:
        >>> raise AppError(ErrorCode.INVALID_INPUT, "Expected JSON array, got dict")
    """

    def __init__(self, code: ErrorCodeType, message: str, http_status: int | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.http_status = http_status if http_status is not None else _default_status_for(code)


_ERROR_CODE_STATUS: dict[ErrorCode, int] = {
    ErrorCode.INVALID_INPUT: 400,
    ErrorCode.INVALID_JSON: 400,
    ErrorCode.INTERNAL_ERROR: 500,
}

_INTERNAL_MESSAGE = "Internal server error"


def _default_status_for(code: ErrorCodeBase) -> int:
    if isinstance(code, ErrorCode):
        return _ERROR_CODE_STATUS.get(code, 500)
    return 500


def _code_value(code: ErrorCodeBase) -> str:
    result: str = code
    return result


def _is_classified(exc: Exception) -> bool:
    return isinstance(exc, (AppError, DecodeError, InvalidJsonError))


def to_app_error(exc: Exception) -> AppError[ErrorCodeBase]:
    """Classify an exception raised while serving a request.

    AppError passes through unchanged. InvalidJsonError becomes INVALID_JSON
    and any other DecodeError becomes INVALID_INPUT, both keeping the decoder
    message. Everything else becomes INTERNAL_ERROR with a generic message;
    the original text only reaches the log.
    """
    if isinstance(exc, AppError):
        return exc
    if isinstance(exc, InvalidJsonError):
        return AppError(ErrorCode.INVALID_JSON, str(exc))
    if isinstance(exc, DecodeError):
        return AppError(ErrorCode.INVALID_INPUT, str(exc))
    return AppError(ErrorCode.INTERNAL_ERROR, _INTERNAL_MESSAGE)


def error_body(error: AppError[ErrorCodeBase], request_id: str) -> dict[str, str]:
    """Build the ``{"code", "message", "request_id"}`` response payload."""
    return {
        "code": _code_value(error.code),
        "message": error.message,
        "request_id": request_id,
    }


def log_error(
    logger: logging.Logger,
    exc: Exception,
    error: AppError[ErrorCodeBase],
    *,
    path: str,
    method: str,
    request_id: str,
    log_user_errors: bool = True,
) -> None:
    """Log a request failure with the structured error fields.

    Unclassified exceptions log "unhandled_exception" at ERROR with the
    traceback, 5xx application errors log "system_error" at ERROR, and 4xx
    errors log "user_error" at INFO unless ``log_user_errors`` is False.
    """
    fields: dict[str, str] = {
        "error_code": _code_value(error.code),
        "error_message": str(exc),
        "request_id": request_id,
        "path": path,
        "method": method,
    }
    if not _is_classified(exc):
        fields["error_type"] = type(exc).__name__
        logger.error("unhandled_exception", extra=fields, exc_info=exc)
    elif error.http_status >= 500:
        logger.error("system_error", extra=fields, exc_info=exc)
    elif log_user_errors:
        logger.info("user_error", extra=fields)


__all__ = [
    "AppError",
    "ErrorCode",
    "ErrorCodeBase",
    "error_body",
    "log_error",
    "to_app_error",
]
