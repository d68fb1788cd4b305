"""
Query parameter parsing for discovery requests.

Raw values arrive as strings (or not at all). Bad input never errors; it
falls back to the default. `DiscoveryQuery` runs these on every construction,
so the rules hold for HTTP and direct engine callers alike.
"""

import re
from typing import Optional

from .constants import DEFAULT_LIMIT, DEFAULT_OFFSET, MAX_LIMIT, MIN_LIMIT

# Leading integer, as in "12abc" -> 12 and "3.7" -> 3
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def _parse_int(raw) -> Optional[int]:
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw)
    match = _LEADING_INT.match(str(raw))
    if not match:
        return None
    return int(match.group(1))


def parse_limit(raw) -> int:
    """Missing, invalid or below 1 -> DEFAULT_LIMIT; above MAX_LIMIT -> MAX_LIMIT."""
    value = _parse_int(raw)
    if value is None or value < MIN_LIMIT:
        return DEFAULT_LIMIT
    return min(value, MAX_LIMIT)


def parse_offset(raw) -> int:
    value = _parse_int(raw)
    if value is None or value < 0:
        return DEFAULT_OFFSET
    return value


def parse_bool(raw, default: Optional[bool]) -> Optional[bool]:
    """Only the string "true" (any case) is truthy; missing -> default."""
    if raw is None:
        return default
    if isinstance(raw, bool):
        return raw
    return str(raw).strip().lower() == "true"
