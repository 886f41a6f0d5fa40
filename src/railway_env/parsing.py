"""Strict integer parsing for platform-provided values.

Python's int() is more lenient than the platform contract: it accepts
surrounding whitespace, digit-group underscores and non-ASCII digits.
Values like those are rejected here.
"""

from __future__ import annotations

__all__ = ["parse_int64"]

import re

from railway_env.constants import INT64_MAX, INT64_MIN
from railway_env.telemetry.system_logger import truncate_for_log

_DECIMAL_RE = re.compile(r"[+-]?[0-9]+")
_MAX_INT64_DIGITS = len(str(INT64_MAX))


def parse_int64(value: str) -> int:
    """Parse a base-10 signed 64-bit integer.

    Args:
        value: Optional sign followed by ASCII digits, nothing else.

    Returns:
        The parsed integer.

    Raises:
        ValueError: If the value is not a base-10 integer or does not fit
            in a signed 64-bit integer.
    """
    # Messages end up in exceptions and logs; keep them bounded
    shown = truncate_for_log(value)

    if not _DECIMAL_RE.fullmatch(value):
        raise ValueError(f"invalid syntax: {shown!r} is not a base-10 integer")

    # 2**63 has 19 digits; checking first keeps int() away from huge inputs
    significant = value.lstrip("+-").lstrip("0")
    if len(significant) > _MAX_INT64_DIGITS:
        raise ValueError(f"value out of range: {shown!r} does not fit in 64 bits")

    result = int(value)
    if not INT64_MIN <= result <= INT64_MAX:
        raise ValueError(f"value out of range: {shown!r} does not fit in 64 bits")
    return result
