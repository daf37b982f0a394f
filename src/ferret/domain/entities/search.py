from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
DEFAULT_TIMEOUT_SECONDS = 5.0


@dataclass
class Result:
    """Normalized search hit."""

    link: str
    title: str
    description: str = ""
    date: datetime | None = None  # None = unset
    source: str = ""  # Provider title, assigned by the executor

    def to_dict(self) -> dict[str, Any]:
        return {
            "link": self.link,
            "title": self.title,
            "description": self.description,
            "date": self.date.isoformat() if self.date is not None else None,
            "from": self.source,
        }


@dataclass
class Query:
    """One search request plus the state the executor derives from it.

    Not reused across executions and not shared between callers.
    """

    provider: str
    keyword: str
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    goto: int = 0  # 0 = no-op, else 1-based index into results
    timeout: float = DEFAULT_TIMEOUT_SECONDS  # seconds

    # Derived by the executor
    start: datetime | None = None
    elapsed: float = 0.0  # seconds
    http_status: int = 0
    results: list[Result] = field(default_factory=list)
    goto_link: str | None = None

    @property
    def elapsed_ms(self) -> int:
        return int(self.elapsed * 1000)


@dataclass(frozen=True)
class ProviderInfo:
    """Public view of a registered provider."""

    name: str
    title: str
    enabled: bool = True
    priority: int = 0
