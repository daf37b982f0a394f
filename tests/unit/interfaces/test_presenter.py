"""Tests for terminal rendering."""

from __future__ import annotations

from datetime import datetime, timezone

from ferret.domain.entities import ProviderInfo, Query, Result
from ferret.interfaces.cli.presenter import render_providers, render_results


class TestRenderResults:
    def test_table_with_dates_and_elapsed(self) -> None:
        q = Query(provider="p", keyword="k")
        q.elapsed = 0.042
        q.results = [
            Result(link="l1", title="first", date=datetime(2016, 3, 1, tzinfo=timezone.utc)),
            Result(link="l2", title="second"),
        ]
        assert render_results(q) == (
            "#  TITLE\n"
            "1  first (2016-03-01)\n"
            "2  second\n"
            "\n"
            "42ms"
        )

    def test_empty_results(self) -> None:
        q = Query(provider="p", keyword="k")
        assert render_results(q) == "#  TITLE\n\n0ms"

    def test_wide_index_column(self) -> None:
        q = Query(provider="p", keyword="k")
        q.results = [Result(link=str(i), title=f"t{i}") for i in range(10)]
        lines = render_results(q).splitlines()
        assert lines[0] == "#   TITLE"
        assert lines[1] == "1   t0"
        assert lines[10] == "10  t9"


class TestRenderProviders:
    def test_columns(self) -> None:
        out = render_providers(
            [
                ProviderInfo(name="github", title="GitHub"),
                ProviderInfo(name="trello", title="Trello", enabled=False),
            ]
        )
        assert out.splitlines() == [
            "NAME    TITLE   ENABLED",
            "github  GitHub  yes",
            "trello  Trello  no",
        ]
