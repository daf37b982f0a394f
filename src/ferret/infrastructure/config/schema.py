"""Pydantic configuration models with validation."""

from __future__ import annotations

import shlex
from typing import Any, Literal, Optional

from pydantic import (
    AliasChoices,
    AliasPath,
    BaseModel,
    Field,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from ferret.infrastructure.common.parsers import parse_duration

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]
ProviderType = Literal["answerhub", "consul", "github", "slack", "trello"]


class ProviderConfig(BaseModel):
    """One entry of the ``providers:`` list.

    ``provider`` selects the adapter; ``name`` is the registry key used in
    queries (defaults to the adapter type).  Credential fields are only
    read by the adapters that need them.
    """

    provider: ProviderType
    name: str = ""
    title: str = ""
    enabled: bool = True
    noui: bool = False
    priority: int = 0

    url: str = ""
    username: str = ""
    password: str = ""
    token: str = ""
    key: str = ""
    search_user: str = ""
    query: str = ""

    rewrite: str = Field(
        default="",
        description="Link rewrite rule: 'link|<regexp>|<replacement>'.",
    )

    @model_validator(mode="after")
    def _default_name(self) -> "ProviderConfig":
        if not self.name:
            self.name = self.provider
        return self


class AppConfig(BaseModel):
    """
    Canonical application configuration (validated, final).

    Note:
    - YAML is expected to be sectioned (search/listen/http/logging/providers).
    - Environment variables are handled by EnvOverrides(BaseSettings) to allow strict
      precedence control (defaults < YAML < ENV < CLI) in load.py.
    """

    # General
    app_name: str = Field(default="ferret", description="Application name.")
    environment: Environment = Field(
        default="dev",
        description="Runtime environment (affects defaults like log format).",
    )

    # Search (YAML section: search.*)
    goto_cmd: str = Field(
        default="open",
        validation_alias=AliasChoices(
            "goto_cmd",
            AliasPath("search", "goto_cmd"),
        ),
        description="Command used to open a result link (e.g. open, xdg-open).",
    )
    search_timeout: str = Field(
        default="5000ms",
        validation_alias=AliasChoices(
            "search_timeout",
            AliasPath("search", "timeout"),
        ),
        description="Default query timeout as a duration string.",
    )

    # HTTP API (YAML section: listen.*)
    listen_address: str = Field(
        default=":3030",
        validation_alias=AliasChoices(
            "listen_address",
            AliasPath("listen", "address"),
        ),
        description="Bind address as host:port (host may be empty).",
    )
    listen_providers: str = Field(
        default="",
        validation_alias=AliasChoices(
            "listen_providers",
            AliasPath("listen", "providers"),
        ),
        description="Comma-separated providers exposed over HTTP (empty = all).",
    )

    # Outgoing HTTP (YAML section: http.*)
    http_user_agent: str = Field(
        default="Ferret/0.1.0",
        validation_alias=AliasChoices(
            "http_user_agent",
            AliasPath("http", "user_agent"),
        ),
        description="User-Agent for outgoing HTTP requests.",
    )

    # Logging (YAML section: logging.*)
    log_level: LogLevel = Field(
        default="INFO",
        validation_alias=AliasChoices(
            "log_level",
            AliasPath("logging", "level"),
        ),
        description="Log level.",
    )
    log_format: Optional[LogFormat] = Field(
        default=None,
        validation_alias=AliasChoices(
            "log_format",
            AliasPath("logging", "format"),
        ),
        description=(
            "Log renderer format (console/json). If unset, derived from environment."
        ),
    )

    providers: list[ProviderConfig] = Field(default_factory=list)

    @field_validator("goto_cmd")
    @classmethod
    def _validate_goto_cmd(cls, v: str) -> str:
        if not shlex.split(v):
            raise ValueError("search.goto_cmd must not be empty")
        return v

    @field_validator("search_timeout")
    @classmethod
    def _validate_search_timeout(cls, v: str) -> str:
        if parse_duration(v) <= 0:
            raise ValueError("search.timeout must be > 0")
        return v

    @field_validator("listen_address")
    @classmethod
    def _validate_listen_address(cls, v: str) -> str:
        _, sep, port = v.rpartition(":")
        if not sep or not port.isdigit():
            raise ValueError("listen.address must look like 'host:port' or ':port'")
        return v

    @model_validator(mode="after")
    def _derive_defaults(self) -> "AppConfig":
        # Default log format: console in dev/test, json in prod.
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"
        return self

    @property
    def timeout_seconds(self) -> float:
        return parse_duration(self.search_timeout)

    @property
    def listen_host(self) -> str:
        host = self.listen_address.rpartition(":")[0]
        return host or "0.0.0.0"

    @property
    def listen_port(self) -> int:
        return int(self.listen_address.rpartition(":")[2])

    def to_sectioned_dict(self) -> dict[str, Any]:
        """
        Dump configuration in the sectioned shape used by config.yaml/docs.

        Credentials are masked.
        """
        providers = []
        for p in self.providers:
            data = p.model_dump()
            for secret in ("password", "token", "key"):
                if data[secret]:
                    data[secret] = "***"
            providers.append(data)
        return {
            "app_name": self.app_name,
            "environment": self.environment,
            "search": {"goto_cmd": self.goto_cmd, "timeout": self.search_timeout},
            "listen": {
                "address": self.listen_address,
                "providers": self.listen_providers,
            },
            "http": {"user_agent": self.http_user_agent},
            "logging": {"level": self.log_level, "format": self.log_format},
            "providers": providers,
        }


class EnvOverrides(BaseSettings):
    """
    Environment-variable overrides (all optional).

    Intended usage:
    - load.py creates EnvOverrides() to read FERRET_* variables,
      converts to dict of set values, merges into YAML/defaults,
      then validates AppConfig.

    Supported env var examples (flat, explicit):
    - FERRET_GOTO_CMD
    - FERRET_SEARCH_TIMEOUT
    - FERRET_LISTEN_ADDRESS
    - FERRET_LOG_LEVEL
    """

    model_config = SettingsConfigDict(
        env_prefix="FERRET_",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: Optional[str] = None
    environment: Optional[Environment] = None

    goto_cmd: Optional[str] = None
    search_timeout: Optional[str] = None

    listen_address: Optional[str] = None
    listen_providers: Optional[str] = None

    http_user_agent: Optional[str] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    def to_update_dict(self) -> dict[str, Any]:
        """
        Return only values that were actually provided (non-None), for merging.
        """
        return self.model_dump(exclude_none=True)
