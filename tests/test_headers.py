"""Tests for Railway edge header extraction."""

import logging
from datetime import datetime, timezone

import httpx
import pytest
from pydantic import ValidationError
from starlette.requests import Request

from railway_env import RailwayHeaders, headers_from_request, parse_request_start


def make_request(headers: dict[str, str]) -> Request:
    """Build a Starlette Request with the given headers."""
    return Request(
        {
            "type": "http",
            "method": "GET",
            "path": "/",
            "query_string": b"",
            "headers": [(k.lower().encode("latin-1"), v.encode("latin-1")) for k, v in headers.items()],
        }
    )


ALL_HEADERS = {
    "X-Real-IP": "203.0.113.7",
    "X-Forwarded-Proto": "https",
    "X-Forwarded-Host": "example.up.railway.app",
    "X-Railway-Edge": "railway/us-west2",
    "X-Request-Start": "1700000000000",
    "X-Railway-Request-Id": "abc123",
}


# ============================================================================
# parse_request_start
# ============================================================================


class TestParseRequestStart:
    """Tests for parse_request_start."""

    def test_converts_unix_milliseconds(self) -> None:
        result = parse_request_start("1700000000000")

        assert result == datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)

    def test_keeps_millisecond_precision(self) -> None:
        result = parse_request_start("1700000000123")

        assert result is not None
        assert result.microsecond == 123000

    def test_result_is_utc(self) -> None:
        result = parse_request_start("0")

        assert result == datetime(1970, 1, 1, tzinfo=timezone.utc)
        assert result.tzinfo == timezone.utc

    def test_accepts_before_epoch(self) -> None:
        assert parse_request_start("-1000") == datetime(1969, 12, 31, 23, 59, 59, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value", [None, ""])
    def test_missing_is_none(self, value: str | None) -> None:
        assert parse_request_start(value) is None

    @pytest.mark.parametrize("value", ["not-a-number", "1700000000000.5", " 1700000000000", "1e12"])
    def test_malformed_is_none(self, value: str) -> None:
        assert parse_request_start(value) is None

    @pytest.mark.parametrize("value", ["9223372036854775807", "-9223372036854775808", "9" * 40])
    def test_unrepresentable_is_none(self, value: str) -> None:
        """Values that fit no datetime degrade to None instead of raising."""
        assert parse_request_start(value) is None

    def test_malformed_logs_truncated_value(self, system_log_records: list[logging.LogRecord]) -> None:
        parse_request_start("x" * 500)

        assert [r.msg["event"] for r in system_log_records] == ["request_start_invalid"]
        assert system_log_records[0].levelno == logging.WARNING
        assert len(system_log_records[0].msg["value"]) == 64 + len("...")

    def test_missing_does_not_log(self, system_log_records: list[logging.LogRecord]) -> None:
        parse_request_start(None)

        assert system_log_records == []


# ============================================================================
# headers_from_request
# ============================================================================


class TestHeadersFromRequest:
    """Tests for headers_from_request."""

    def test_reads_all_headers(self) -> None:
        # Act
        headers = headers_from_request(make_request(ALL_HEADERS))

        # Assert
        assert headers.real_ip == "203.0.113.7"
        assert headers.forwarded_proto == "https"
        assert headers.forwarded_host == "example.up.railway.app"
        assert headers.railway_edge == "railway/us-west2"
        assert headers.request_start == datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)
        assert headers.railway_request_id == "abc123"

    def test_no_headers_gives_zero_value(self) -> None:
        headers = headers_from_request(make_request({}))

        assert headers == RailwayHeaders()
        assert headers.real_ip == ""
        assert headers.forwarded_proto == ""
        assert headers.forwarded_host == ""
        assert headers.railway_edge == ""
        assert headers.request_start is None
        assert headers.railway_request_id == ""

    def test_invalid_request_start_does_not_fail(self) -> None:
        headers = headers_from_request(make_request({**ALL_HEADERS, "X-Request-Start": "not-a-number"}))

        assert headers.request_start is None
        assert headers.railway_request_id == "abc123"

    def test_header_names_are_case_insensitive(self) -> None:
        headers = headers_from_request(make_request({"x-railway-request-id": "abc123"}))

        assert headers.railway_request_id == "abc123"

    def test_text_copied_verbatim(self) -> None:
        headers = headers_from_request(make_request({"X-Real-IP": "203.0.113.7, 10.0.0.1"}))

        assert headers.real_ip == "203.0.113.7, 10.0.0.1"

    def test_accepts_httpx_request(self) -> None:
        """Any object with a case-insensitive headers mapping works."""
        request = httpx.Request("GET", "https://example.com", headers=ALL_HEADERS)

        headers = headers_from_request(request)

        assert headers.railway_request_id == "abc123"
        assert headers.request_start is not None


# ============================================================================
# RailwayHeaders model
# ============================================================================


class TestRailwayHeaders:
    """RailwayHeaders value semantics."""

    def test_is_immutable(self) -> None:
        headers = RailwayHeaders(real_ip="203.0.113.7")

        with pytest.raises(ValidationError):
            headers.real_ip = "10.0.0.1"  # type: ignore[misc]

    def test_aliases_are_header_names(self) -> None:
        aliases = {f.alias for f in RailwayHeaders.model_fields.values()}

        assert aliases == set(ALL_HEADERS)

    def test_dump_by_alias(self) -> None:
        headers = headers_from_request(make_request(ALL_HEADERS))

        dumped = headers.model_dump(mode="json", by_alias=True)

        assert dumped["X-Railway-Request-Id"] == "abc123"
        assert dumped["X-Request-Start"] == "2023-11-14T22:13:20Z"
