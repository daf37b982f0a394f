"""Common infrastructure utilities."""

from __future__ import annotations

from .parsers import (
    parse_duration,
    parse_goto,
    parse_limit,
    parse_page,
    parse_timeout,
)

__all__ = [
    "parse_duration",
    "parse_goto",
    "parse_limit",
    "parse_page",
    "parse_timeout",
]
