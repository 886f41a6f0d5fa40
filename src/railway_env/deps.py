"""FastAPI dependencies for Railway records.

Usage with Annotated:
    from railway_env.deps import RailwayEnvDep, RailwayHeadersDep

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.railway_env = must_load()
        yield

    @app.get("/whoami")
    async def whoami(env: RailwayEnvDep, headers: RailwayHeadersDep) -> dict:
        return {"service": env.service_name, "client_ip": headers.real_ip}
"""

from __future__ import annotations

__all__ = [
    # Dependency functions
    "get_railway_env",
    "get_railway_headers",
    # Type aliases for Annotated pattern
    "RailwayEnvDep",
    "RailwayHeadersDep",
    # app.state attribute
    "RAILWAY_ENV_STATE_ATTR",
]

from typing import Annotated

from fastapi import Depends, HTTPException, Request

from railway_env.env import RailwayEnv
from railway_env.headers import RailwayHeaders, headers_from_request
from railway_env.middleware import headers_from_context

RAILWAY_ENV_STATE_ATTR = "railway_env"


def get_railway_env(request: Request) -> RailwayEnv:
    """Get the RailwayEnv stored on app.state at startup.

    Raises:
        HTTPException: 503 if the application has not stored a RailwayEnv.
    """
    value = getattr(request.app.state, RAILWAY_ENV_STATE_ATTR, None)
    if not isinstance(value, RailwayEnv):
        raise HTTPException(status_code=503, detail="Railway environment not loaded")
    return value


def get_railway_headers(request: Request) -> RailwayHeaders:
    """Get the RailwayHeaders for this request.

    Uses the record stored by RailwayHeadersMiddleware, or parses the
    request directly when the middleware is not installed.
    """
    headers, found = headers_from_context(request)
    if found:
        return headers
    return headers_from_request(request)


RailwayEnvDep = Annotated[RailwayEnv, Depends(get_railway_env)]
RailwayHeadersDep = Annotated[RailwayHeaders, Depends(get_railway_headers)]
