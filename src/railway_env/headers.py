"""HTTP request headers set by the Railway edge proxy.

headers_from_request() is total: missing headers become "" and a malformed
X-Request-Start becomes None. Request handling must never fail because an
edge header is odd.

See https://docs.railway.com/reference/public-networking
"""

from __future__ import annotations

__all__ = [
    "RailwayHeaders",
    "headers_from_request",
    "parse_request_start",
]

from datetime import datetime, timedelta, timezone
from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict, Field

from railway_env.constants import (
    HEADER_FORWARDED_HOST,
    HEADER_FORWARDED_PROTO,
    HEADER_RAILWAY_EDGE,
    HEADER_RAILWAY_REQUEST_ID,
    HEADER_REAL_IP,
    HEADER_REQUEST_START,
)
from railway_env.parsing import parse_int64
from railway_env.telemetry.system_logger import get_system_logger, truncate_for_log

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class _HasHeaders(Protocol):
    """Anything with a case-insensitive headers mapping.

    Starlette Request/WebSocket/HTTPConnection and httpx Request all qualify.
    """

    @property
    def headers(self) -> Any: ...


class RailwayHeaders(BaseModel):
    """The Railway edge headers of a single request.

    A default-constructed RailwayHeaders() is the zero value: all text
    fields empty and request_start None.

    Attributes:
        real_ip: X-Real-IP, the client's remote IP.
        forwarded_proto: X-Forwarded-Proto, always "https" on Railway.
        forwarded_host: X-Forwarded-Host, the original Host header.
        railway_edge: X-Railway-Edge, the edge region that handled the request.
        request_start: X-Request-Start, when the edge received the request (UTC).
        railway_request_id: X-Railway-Request-Id, for correlating with network logs.
    """

    real_ip: str = Field(default="", alias=HEADER_REAL_IP)
    forwarded_proto: str = Field(default="", alias=HEADER_FORWARDED_PROTO)
    forwarded_host: str = Field(default="", alias=HEADER_FORWARDED_HOST)
    railway_edge: str = Field(default="", alias=HEADER_RAILWAY_EDGE)
    request_start: datetime | None = Field(default=None, alias=HEADER_REQUEST_START)
    railway_request_id: str = Field(default="", alias=HEADER_RAILWAY_REQUEST_ID)

    model_config = ConfigDict(frozen=True, populate_by_name=True)


def parse_request_start(value: str | None) -> datetime | None:
    """Convert an X-Request-Start value to a UTC datetime.

    Args:
        value: Milliseconds since the Unix epoch, as sent by the edge.

    Returns:
        Timezone-aware UTC datetime, or None if the value is missing,
        not a base-10 integer, or outside the datetime range.
    """
    if not value:
        return None

    try:
        millis = parse_int64(value)
        # timedelta arithmetic is exact; fromtimestamp(millis / 1000) is not
        return _EPOCH + timedelta(milliseconds=millis)
    except (ValueError, OverflowError) as e:
        get_system_logger().warning(
            {
                "event": "request_start_invalid",
                "message": f"Ignoring invalid {HEADER_REQUEST_START} header",
                "value": truncate_for_log(value),
                "error": str(e),
            }
        )
        return None


def headers_from_request(request: _HasHeaders) -> RailwayHeaders:
    """Extract the Railway headers from a request.

    Args:
        request: Object with a case-insensitive `headers` mapping, e.g. a
            Starlette Request.

    Returns:
        RailwayHeaders: Never raises; missing headers become "" and an
        invalid X-Request-Start becomes None.
    """
    headers = request.headers
    return RailwayHeaders(
        real_ip=headers.get(HEADER_REAL_IP, ""),
        forwarded_proto=headers.get(HEADER_FORWARDED_PROTO, ""),
        forwarded_host=headers.get(HEADER_FORWARDED_HOST, ""),
        railway_edge=headers.get(HEADER_RAILWAY_EDGE, ""),
        request_start=parse_request_start(headers.get(HEADER_REQUEST_START)),
        railway_request_id=headers.get(HEADER_RAILWAY_REQUEST_ID, ""),
    )
