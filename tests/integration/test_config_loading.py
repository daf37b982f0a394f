"""Integration tests for configuration loading with layered precedence.

Tests the real load_config() function with actual YAML files, environment
variables, and CLI overrides to verify precedence: defaults < YAML < ENV < CLI.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from ferret.infrastructure.config.load import load_config

pytestmark = pytest.mark.integration


class TestDefaultsOnly:
    """Load with no YAML, no ENV, no CLI: pure defaults."""

    def test_defaults_produce_valid_config(self) -> None:
        config = load_config()
        assert config.app_name == "ferret"
        assert config.environment == "dev"
        assert config.goto_cmd == "open"
        assert config.search_timeout == "5000ms"
        assert config.listen_address == ":3030"
        assert config.log_level == "INFO"
        assert config.log_format == "console"
        assert config.providers == []

    def test_defaults_derive_log_format_from_environment(self) -> None:
        config = load_config(cli_overrides={"environment": "prod"})
        assert config.log_format == "json"


class TestYamlOverrides:
    def test_yaml_overrides_defaults(
        self, config_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("FERRET_TEST_GH_TOKEN", "gh-secret")
        config = load_config(config_path=config_file)
        assert config.environment == "test"
        assert config.goto_cmd == "xdg-open"
        assert config.timeout_seconds == 2.0
        assert config.listen_port == 3031
        assert config.listen_providers == "github,consul"
        assert config.log_level == "DEBUG"

        names = [p.name for p in config.providers]
        assert names == ["github", "consul", "slack"]
        assert config.providers[0].token == "gh-secret"
        assert config.providers[0].search_user == "yieldbot"
        assert config.providers[1].rewrite.startswith("link|")
        assert config.providers[2].noui is True

    def test_unset_placeholder_is_empty(self, config_file: Path) -> None:
        config = load_config(config_path=config_file)
        assert config.providers[0].token == ""

    def test_yaml_file_not_found_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(config_path=tmp_path / "nonexistent.yaml")

    def test_empty_yaml_uses_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(config_path=path).goto_cmd == "open"


class TestPrecedence:
    def test_env_overrides_yaml(
        self, config_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("FERRET_GOTO_CMD", "firefox")
        monkeypatch.setenv("FERRET_SEARCH_TIMEOUT", "750ms")
        config = load_config(config_path=config_file)
        assert config.goto_cmd == "firefox"
        assert config.timeout_seconds == pytest.approx(0.75)

    def test_cli_overrides_env(
        self, config_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("FERRET_LOG_LEVEL", "ERROR")
        config = load_config(
            config_path=config_file, cli_overrides={"log_level": "WARNING"}
        )
        assert config.log_level == "WARNING"

    def test_dotenv_participates_as_env(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        dotenv = tmp_path / ".env"
        dotenv.write_text("FERRET_LISTEN_ADDRESS=:4000\n", encoding="utf-8")
        # load_dotenv writes into os.environ; give it a throwaway copy.
        monkeypatch.setattr(os, "environ", os.environ.copy())
        config = load_config(dotenv_path=dotenv)
        assert config.listen_port == 4000
