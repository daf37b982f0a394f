from __future__ import annotations

from .load import expand_env_placeholders, load_config
from .schema import AppConfig, EnvOverrides, ProviderConfig

__all__ = [
    "AppConfig",
    "EnvOverrides",
    "ProviderConfig",
    "expand_env_placeholders",
    "load_config",
]
