"""Shared fixtures for integration tests.

These tests wire real components (config loader, registry, adapters,
FastAPI app) together with HTTP backends mocked via respx.
"""

from __future__ import annotations

from pathlib import Path
from textwrap import dedent

import pytest


@pytest.fixture()
def config_file(tmp_path: Path) -> Path:
    """YAML config with two providers, one credential read from the env."""
    path = tmp_path / "config.yaml"
    path.write_text(
        dedent(
            """
            environment: test
            search:
              goto_cmd: xdg-open
              timeout: 2s
            listen:
              address: 127.0.0.1:3031
              providers: github,consul
            logging:
              level: DEBUG
            providers:
              - provider: github
                title: GitHub
                token: '{{ env "FERRET_TEST_GH_TOKEN" }}'
                search_user: yieldbot
              - provider: consul
                title: Consul
                url: http://consul.test:8500
                rewrite: 'link|^http://consul\\.test:8500/(.*)$|https://consul.example/$1'
              - provider: slack
                noui: true
                token: xoxp-1
            """
        ),
        encoding="utf-8",
    )
    return path
