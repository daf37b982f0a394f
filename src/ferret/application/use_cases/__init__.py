from .providers import ListProvidersUseCase
from .search import SearchUseCase

__all__ = ["ListProvidersUseCase", "SearchUseCase"]
