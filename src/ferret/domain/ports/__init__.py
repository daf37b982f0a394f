from .goto_action import GotoActionPort
from .provider_registry import ProviderRegistryPort

__all__ = [
    "GotoActionPort",
    "ProviderRegistryPort",
]
