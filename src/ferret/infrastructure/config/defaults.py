"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "ferret",
    "environment": "dev",
    "search": {
        "goto_cmd": "open",
        "timeout": "5000ms",
    },
    "listen": {
        "address": ":3030",
        "providers": "",
    },
    "http": {
        "user_agent": "Ferret/0.1.0",
    },
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
    "providers": [],
}
