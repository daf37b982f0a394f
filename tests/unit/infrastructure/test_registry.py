"""Tests for ProviderRegistry."""

from __future__ import annotations

import pytest

from ferret.domain.exceptions import (
    DuplicateProviderError,
    InvalidProviderError,
    ProviderNotFoundError,
)


class TestRegister:
    def test_register_and_get(self, registry, make_provider) -> None:
        registry.register(make_provider("github", title="GitHub"))
        assert registry.get("github").title == "GitHub"
        assert "github" in registry
        assert len(registry) == 1

    def test_empty_title_defaults_to_name(self, registry, make_provider) -> None:
        stored = registry.register(make_provider("consul"))
        assert stored.title == "consul"
        assert registry.get("consul").title == "consul"

    def test_empty_name_rejected(self, registry, make_provider) -> None:
        with pytest.raises(InvalidProviderError):
            registry.register(make_provider(""))
        assert len(registry) == 0

    def test_duplicate_rejected_first_kept(self, registry, make_provider) -> None:
        registry.register(make_provider("slack", title="first"))
        with pytest.raises(DuplicateProviderError, match="already registered"):
            registry.register(make_provider("slack", title="second"))
        assert registry.get("slack").title == "first"


class TestLookup:
    def test_get_unknown(self, registry) -> None:
        with pytest.raises(ProviderNotFoundError, match="couldn't be found"):
            registry.get("nope")

    def test_list_names_sorted(self, registry, make_provider) -> None:
        for name in ("trello", "answerhub", "github"):
            registry.register(make_provider(name))
        assert registry.list_names() == ["answerhub", "github", "trello"]
        assert [p.name for p in registry.list_providers()] == [
            "answerhub",
            "github",
            "trello",
        ]

    def test_empty_registry(self, registry) -> None:
        assert registry.list_names() == []
        assert "x" not in registry
