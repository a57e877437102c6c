"""FastAPI wiring for decode failures.

Routes decode request bodies with the leaf and derived decoders and let the
exceptions escape; the handlers here turn them into JSON error responses:

    app = FastAPI()
    install_exception_handlers(app, logger_name="orders-api")

Services that keep their own AppError and catch-all handlers register only
``register_decode_error_handler``.
"""

from __future__ import annotations

from contextvars import ContextVar
from typing import Protocol

from fastapi.responses import JSONResponse
from starlette.requests import Request
from starlette.responses import Response

from decodable.errors import AppError, error_body, log_error, to_app_error
from decodable.json_utils import DecodeError, InvalidJsonError
from decodable.logging import get_logger
from decodable.request_context import request_id_var as _global_request_id_var


class _ExceptionHandler(Protocol):
    async def __call__(self, request: Request, exc: Exception) -> Response: ...


class _FastAPILike(Protocol):
    def add_exception_handler(
        self,
        exc_class_or_status_code: int | type[Exception],
        handler: _ExceptionHandler,
    ) -> None: ...


def _error_handler(
    *,
    request_id_var: ContextVar[str] | None,
    logger_name: str,
    log_user_errors: bool,
) -> _ExceptionHandler:
    logger = get_logger(logger_name)

    async def _handle(request: Request, exc: Exception) -> Response:
        rid = request_id_var.get() if request_id_var is not None else ""
        error = to_app_error(exc)
        log_error(
            logger,
            exc,
            error,
            path=request.url.path,
            method=request.method,
            request_id=rid,
            log_user_errors=log_user_errors,
        )
        return JSONResponse(content=error_body(error, rid), status_code=error.http_status)

    return _handle


def register_decode_error_handler(
    app: _FastAPILike,
    *,
    request_id_var: ContextVar[str] | None = _global_request_id_var,
    logger_name: str = "decodable",
    log_user_errors: bool = True,
) -> None:
    """Render decode failures escaping a route as 400 responses.

    DecodeError (TypeMismatchError included) becomes INVALID_INPUT and
    InvalidJsonError becomes INVALID_JSON, with the decoder message as the
    response message.
    """
    handler = _error_handler(
        request_id_var=request_id_var,
        logger_name=logger_name,
        log_user_errors=log_user_errors,
    )
    app.add_exception_handler(DecodeError, handler)
    app.add_exception_handler(InvalidJsonError, handler)


def install_exception_handlers(
    app: _FastAPILike,
    *,
    request_id_var: ContextVar[str] | None = _global_request_id_var,
    logger_name: str = "decodable",
    log_user_errors: bool = True,
) -> None:
    """Register the decode handlers plus AppError and a catch-all for Exception.

    Unhandled exceptions answer 500 INTERNAL_ERROR without exposing their
    message.
    """
    register_decode_error_handler(
        app,
        request_id_var=request_id_var,
        logger_name=logger_name,
        log_user_errors=log_user_errors,
    )
    handler = _error_handler(
        request_id_var=request_id_var,
        logger_name=logger_name,
        log_user_errors=log_user_errors,
    )
    app.add_exception_handler(AppError, handler)
    app.add_exception_handler(Exception, handler)


__all__ = [
    "install_exception_handlers",
    "register_decode_error_handler",
]
