"""Typed access to Railway platform environment variables and edge headers.

Structure:
    constants.py   - Variable names, header names, bounds
    exceptions.py  - NotRailwayError, MalformedVariableError, RailwayEnvFatalError
    env.py         - RailwayEnv + is_railway/load/must_load
    headers.py     - RailwayHeaders + headers_from_request
    middleware.py  - RailwayHeadersMiddleware + headers_from_context
    deps.py        - FastAPI dependencies
    telemetry/     - System logger
"""

from railway_env.constants import (
    HEADER_FORWARDED_HOST,
    HEADER_FORWARDED_PROTO,
    HEADER_RAILWAY_EDGE,
    HEADER_RAILWAY_REQUEST_ID,
    HEADER_REAL_IP,
    HEADER_REQUEST_START,
)
from railway_env.env import RailwayEnv, is_railway, load, must_load
from railway_env.exceptions import (
    MalformedVariableError,
    NotRailwayError,
    RailwayEnvError,
    RailwayEnvFatalError,
    VariableError,
)
from railway_env.headers import RailwayHeaders, headers_from_request, parse_request_start
from railway_env.middleware import RailwayHeadersMiddleware, headers_from_context

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Environment
    "RailwayEnv",
    "is_railway",
    "load",
    "must_load",
    # Errors
    "MalformedVariableError",
    "NotRailwayError",
    "RailwayEnvError",
    "RailwayEnvFatalError",
    "VariableError",
    # Headers
    "HEADER_FORWARDED_HOST",
    "HEADER_FORWARDED_PROTO",
    "HEADER_RAILWAY_EDGE",
    "HEADER_RAILWAY_REQUEST_ID",
    "HEADER_REAL_IP",
    "HEADER_REQUEST_START",
    "RailwayHeaders",
    "headers_from_request",
    "parse_request_start",
    # Middleware
    "RailwayHeadersMiddleware",
    "headers_from_context",
]
