from .fetch import fetch
from .httpx_base import HttpxProviderBase, ProviderFetchError
from .registry import ProviderRegistry

__all__ = [
    "HttpxProviderBase",
    "ProviderFetchError",
    "ProviderRegistry",
    "fetch",
]
