from .base import Provider, RawEntry, SearchCapability

__all__ = [
    "Provider",
    "RawEntry",
    "SearchCapability",
]
