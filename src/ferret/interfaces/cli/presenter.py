"""Plain-text rendering of search results for the terminal."""

from __future__ import annotations

from collections.abc import Sequence

from ferret.domain.entities import ProviderInfo, Query


def _table(rows: Sequence[Sequence[str]]) -> str:
    widths = [max(len(row[i]) for row in rows) for i in range(len(rows[0]))]
    lines = []
    for row in rows:
        cells = [cell.ljust(width) for cell, width in zip(row, widths)]
        lines.append("  ".join(cells).rstrip())
    return "\n".join(lines)


def render_results(query: Query) -> str:
    """Numbered ``#  TITLE (YYYY-MM-DD)`` table followed by the elapsed time."""
    rows: list[tuple[str, str]] = [("#", "TITLE")]
    for i, result in enumerate(query.results, start=1):
        title = result.title
        if result.date is not None:
            title += f" ({result.date:%Y-%m-%d})"
        rows.append((str(i), title))
    return f"{_table(rows)}\n\n{query.elapsed_ms}ms"


def render_providers(providers: Sequence[ProviderInfo]) -> str:
    rows: list[tuple[str, ...]] = [("NAME", "TITLE", "ENABLED")]
    for p in providers:
        rows.append((p.name, p.title, "yes" if p.enabled else "no"))
    return _table(rows)
