from .results import RewriteRule, paginate, sort_results
from .search import (
    DEFAULT_LIMIT,
    DEFAULT_PAGE,
    DEFAULT_TIMEOUT_SECONDS,
    ProviderInfo,
    Query,
    Result,
)

__all__ = [
    "DEFAULT_LIMIT",
    "DEFAULT_PAGE",
    "DEFAULT_TIMEOUT_SECONDS",
    "ProviderInfo",
    "Query",
    "Result",
    "RewriteRule",
    "paginate",
    "sort_results",
]
