"""Tests for config schema and loading helpers."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from ferret.infrastructure.config import (
    AppConfig,
    ProviderConfig,
    expand_env_placeholders,
    load_config,
)


class TestAppConfig:
    def test_defaults(self) -> None:
        config = AppConfig()
        assert config.goto_cmd == "open"
        assert config.search_timeout == "5000ms"
        assert config.timeout_seconds == 5.0
        assert config.listen_host == "0.0.0.0"
        assert config.listen_port == 3030
        assert config.log_format == "console"
        assert config.providers == []

    def test_prod_defaults_to_json_logs(self) -> None:
        assert AppConfig(environment="prod").log_format == "json"

    def test_sectioned_input(self) -> None:
        config = AppConfig.model_validate(
            {
                "search": {"goto_cmd": "xdg-open", "timeout": "2s"},
                "listen": {"address": "127.0.0.1:8080", "providers": "github"},
            }
        )
        assert config.goto_cmd == "xdg-open"
        assert config.timeout_seconds == 2.0
        assert config.listen_host == "127.0.0.1"
        assert config.listen_port == 8080
        assert config.listen_providers == "github"

    @pytest.mark.parametrize("timeout", ["soon", "0", "-1s"])
    def test_invalid_timeout(self, timeout: str) -> None:
        with pytest.raises(ValidationError):
            AppConfig(search_timeout=timeout)

    @pytest.mark.parametrize("command", ["", "   ", "'unbalanced"])
    def test_invalid_goto_cmd(self, command: str) -> None:
        with pytest.raises(ValidationError, match="goto_cmd"):
            AppConfig(goto_cmd=command)

    def test_goto_cmd_with_arguments(self) -> None:
        assert AppConfig(goto_cmd="firefox --new-tab").goto_cmd == "firefox --new-tab"

    @pytest.mark.parametrize("address",["localhost", ":http", ""])
    def test_invalid_listen_address(self, address: str) -> None:
        with pytest.raises(ValidationError):
            AppConfig(listen_address=address)

    def test_sectioned_dump_masks_secrets(self) -> None:
        config = AppConfig(
            providers=[ProviderConfig(provider="slack", token="xoxp-secret")]
        )
        dumped = config.to_sectioned_dict()
        assert dumped["providers"][0]["token"] == "***"
        assert dumped["search"]["timeout"] == "5000ms"


class TestProviderConfig:
    def test_unknown_type_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ProviderConfig(provider="jira")

    def test_name_defaults_to_type(self) -> None:
        assert ProviderConfig(provider="github").name == "github"


class TestEnvPlaceholders:
    def test_replaced(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GH_TOKEN", "abc")
        assert expand_env_placeholders('token: {{ env "GH_TOKEN" }}') == "token: abc"

    def test_unset_is_empty(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NOPE_NOT_SET", raising=False)
        assert expand_env_placeholders("t: {{env 'NOPE_NOT_SET'}}x") == "t: x"


class TestLoadConfig:
    def test_config_path_from_env(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        path = tmp_path / "ferret.yaml"
        path.write_text("search:\n  goto_cmd: xdg-open\n", encoding="utf-8")
        monkeypatch.setenv("FERRET_CONFIG", str(path))
        assert load_config().goto_cmd == "xdg-open"

    def test_non_mapping_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError, match="mapping"):
            load_config(config_path=path)

    def test_missing_dotenv(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(dotenv_path=tmp_path / ".env")
