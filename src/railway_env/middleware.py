"""ASGI middleware that attaches RailwayHeaders to each request.

The middleware parses the Railway edge headers once per request and hands
the downstream app a copy of the scope holding them under a private key.
While the downstream app runs, the same record is also available through a
ContextVar, for code that has no access to the request (e.g. logging).

Usage:
    app = FastAPI()
    app.add_middleware(RailwayHeadersMiddleware)

    @app.get("/")
    async def index(request: Request):
        headers, found = headers_from_context(request)
"""

from __future__ import annotations

__all__ = [
    "RailwayHeadersMiddleware",
    "headers_from_context",
]

from collections.abc import Mapping
from contextvars import ContextVar
from typing import Any

from starlette.requests import HTTPConnection
from starlette.types import ASGIApp, Receive, Scope, Send

from railway_env.headers import RailwayHeaders, headers_from_request


class _HeadersKey:
    """Scope key type. Only this module holds an instance."""

    def __repr__(self) -> str:
        return "<railway_env headers key>"


_HEADERS_KEY = _HeadersKey()

_current_headers: ContextVar[RailwayHeaders | None] = ContextVar(
    "railway_headers", default=None
)
"""Headers of the request currently being handled, if any."""


class RailwayHeadersMiddleware:
    """Pass-through middleware storing RailwayHeaders in the request scope.

    Only http and websocket scopes are enriched; lifespan passes through.
    The caller's scope dict is never mutated.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] not in ("http", "websocket"):
            await self.app(scope, receive, send)
            return

        headers = headers_from_request(HTTPConnection(scope))
        child_scope = dict(scope)
        child_scope[_HEADERS_KEY] = headers

        token = _current_headers.set(headers)
        try:
            await self.app(child_scope, receive, send)
        finally:
            _current_headers.reset(token)


def headers_from_context(scope: Any = None) -> tuple[RailwayHeaders, bool]:
    """Get the RailwayHeaders stored by RailwayHeadersMiddleware.

    Args:
        scope: ASGI scope mapping, or an object with a `.scope` (Starlette
            Request/WebSocket). If None, the current context is used.

    Returns:
        (headers, True) if headers were stored, otherwise
        (RailwayHeaders(), False). A stored value of the wrong type counts
        as not stored.
    """
    if scope is None:
        value = _current_headers.get()
    else:
        if not isinstance(scope, Mapping):
            scope = getattr(scope, "scope", None)
        value = scope.get(_HEADERS_KEY) if isinstance(scope, Mapping) else None

    if isinstance(value, RailwayHeaders):
        return value, True
    return RailwayHeaders(), False
