"""Parsing utilities for raw query parameters (CLI flags, URL query)."""

from __future__ import annotations

import re

from ferret.domain.entities import DEFAULT_LIMIT, DEFAULT_PAGE

DEFAULT_TIMEOUT = "5000ms"

_DURATION_UNITS: dict[str, float] = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_DURATION_PART = re.compile(r"(\d+\.?\d*|\.\d+)(ns|us|µs|ms|s|m|h)")


def parse_duration(value: str) -> float:
    """Parse a duration string to seconds.

    Supports formats:
        - "5000ms"
        - "1.5s"
        - "1m30s" (compound)
        - "0"

    Raises:
        ValueError: Empty string, unknown unit or missing unit.
    """
    text = value.strip()
    if not text:
        raise ValueError("empty duration")

    sign = 1.0
    if text[0] in "+-":
        sign = -1.0 if text[0] == "-" else 1.0
        text = text[1:]
    if text == "0":
        return 0.0

    total = 0.0
    pos = 0
    while pos < len(text):
        match = _DURATION_PART.match(text, pos)
        if not match:
            raise ValueError(f"invalid duration {value!r}")
        total += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        pos = match.end()
    if pos == 0:
        raise ValueError(f"invalid duration {value!r}")
    return sign * total


def _positive_int(raw: str | None, default: int) -> int:
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def parse_page(raw: str | None) -> int:
    """Page number; 1 when absent, invalid or not positive."""
    return _positive_int(raw, DEFAULT_PAGE)


def parse_goto(raw: str | None) -> int:
    """Result number to open; 0 (no goto) when absent, invalid or not positive."""
    return _positive_int(raw, 0)


def parse_limit(raw: str | None) -> int:
    """Results per page; 10 when absent, invalid or not positive."""
    return _positive_int(raw, DEFAULT_LIMIT)


def parse_timeout(raw: str | None, default: str = DEFAULT_TIMEOUT) -> float:
    """Query timeout in seconds.

    An absent value falls back to *default* (the configured
    ``search.timeout``).  An unparsable value, or an unparsable
    *default*, falls back to 5000ms.
    """
    fallback = parse_duration(DEFAULT_TIMEOUT)
    try:
        return parse_duration(raw if raw else default)
    except ValueError:
        return fallback
