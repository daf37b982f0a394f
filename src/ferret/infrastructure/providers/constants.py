"""Shared constants for provider adapters."""

from __future__ import annotations

DEFAULT_USER_AGENT = "Ferret/0.1.0 (+https://github.com/yieldbot/ferret)"

DEFAULT_CLIENT_TIMEOUT = 30.0
DEFAULT_DESCRIPTION_LENGTH = 255

DEFAULT_GITHUB_URL = "https://api.github.com"
DEFAULT_SLACK_URL = "https://slack.com/api"
DEFAULT_TRELLO_URL = "https://api.trello.com/1"


def truncate(text: str, length: int = DEFAULT_DESCRIPTION_LENGTH) -> str:
    """Trim *text*; cut to ``length - 3`` chars plus '...' when longer than *length*."""
    text = text.strip()
    if len(text) > length:
        return text[: length - 3] + "..."
    return text
