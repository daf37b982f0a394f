"""Result ordering, pagination and provider rewrite rules."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TypeVar

from ferret.domain.exceptions import RewriteError

from .search import Result

T = TypeVar("T")

# $$, ${name}, $name (name = longest run of word characters)
_TEMPLATE_TOKEN = re.compile(r"\$(?:(\$)|\{(\w+)\}|(\w+))")


def sort_results(results: Sequence[Result]) -> list[Result]:
    """Stable ascending sort by title (code-point order)."""
    return sorted(results, key=lambda r: r.title)


def paginate(items: Sequence[T], page: int, limit: int) -> list[T]:
    """Return the 1-based *page* of *items*, *limit* items per page.

    The window ``[(page-1)*limit, page*limit)`` is clamped to the
    sequence; a window starting past the end is empty.
    """
    if page < 1 or limit < 1:
        return []
    low = (page - 1) * limit
    if low >= len(items):
        return []
    high = min(page * limit, len(items))
    return list(items[low:high])


@dataclass(frozen=True)
class RewriteRule:
    """``link|<pattern>|<replacement>`` regex substitution on result links.

    The replacement supports ``$1``, ``${1}``, ``$name``, ``${name}`` and
    ``$$``; references to unknown groups expand to the empty string.
    """

    pattern: re.Pattern[str]
    replacement: str

    @classmethod
    def parse(cls, rule: str) -> RewriteRule | None:
        """Parse *rule*; returns None for an empty rule.

        Raises:
            RewriteError: Unknown field, missing parts, or bad pattern.
        """
        if not rule:
            return None

        parts = rule.split("|", 2)
        if len(parts) != 3:
            raise RewriteError(
                f"invalid rewrite rule {rule!r}. Expected 'link|<pattern>|<replacement>'"
            )
        field_name, pattern, replacement = parts
        if field_name != "link":
            raise RewriteError(
                f"invalid rewrite field {field_name!r}. Only 'link' is supported"
            )
        try:
            compiled = re.compile(pattern)
        except re.error as e:
            raise RewriteError(f"invalid rewrite pattern {pattern!r}: {e}") from e

        return cls(pattern=compiled, replacement=replacement)

    def rewrite(self, link: str) -> str:
        return self.pattern.sub(self._expand, link)

    def apply(self, results: Sequence[Result]) -> None:
        """Rewrite every link in place and set the title to the new link."""
        for result in results:
            result.link = self.rewrite(result.link)
            # Observed behavior: the original title is discarded.
            result.title = result.link

    def _expand(self, match: re.Match[str]) -> str:
        def token(m: re.Match[str]) -> str:
            if m.group(1):
                return "$"
            name = m.group(2) or m.group(3)
            try:
                group = int(name) if name.isdigit() else name
                return match.group(group) or ""
            except IndexError:
                return ""

        return _TEMPLATE_TOKEN.sub(token, self.replacement)
