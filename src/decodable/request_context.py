from __future__ import annotations

from contextvars import ContextVar

# Request id bound by the serving layer. Read by JsonFormatter and the HTTP
# error handlers; empty outside a request.
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

__all__ = ["request_id_var"]
