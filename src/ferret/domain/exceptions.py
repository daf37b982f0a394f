"""Ferret exceptions.

Search errors carry the HTTP-equivalent outcome code so that callers
(CLI, HTTP API) can map timeout vs. bad request vs. internal error
without inspecting messages.
"""

from __future__ import annotations

from collections.abc import Sequence


class FerretError(Exception):
    """Base class for all Ferret errors."""


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class ProviderRegistryError(FerretError):
    """Base class for provider registry errors."""


class DuplicateProviderError(ProviderRegistryError):
    """Raised when a provider name is registered twice."""


class ProviderNotFoundError(ProviderRegistryError, LookupError):
    """Raised when a provider name is not known to the registry."""


# ---------------------------------------------------------------------------
# Query execution
# ---------------------------------------------------------------------------


class SearchError(FerretError):
    """Base error for query execution."""

    http_status: int = 500


class InvalidProviderError(SearchError, ProviderRegistryError):
    """Unknown provider on query, or an invalid provider on registration."""

    http_status = 400

    def __init__(self, message: str, provider_names: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.provider_names: list[str] = list(provider_names)


class MissingKeywordError(SearchError):
    http_status = 400


class InvalidParameterError(SearchError):
    """Page or limit out of range."""

    http_status = 400


class SearchTimeoutError(SearchError, TimeoutError):
    http_status = 504


class SearchCanceledError(SearchError):
    http_status = 500


class ProviderError(SearchError):
    """Provider or network failure, wrapped with provider and stage context."""

    http_status = 500

    def __init__(self, message: str, *, provider: str = "", stage: str = "") -> None:
        super().__init__(message)
        self.provider = provider
        self.stage = stage


class MalformedResultError(SearchError):
    """A provider returned an entry without link or title."""

    http_status = 500


class RewriteError(SearchError):
    http_status = 500


class InvalidGotoIndexError(SearchError):
    http_status = 400


class GotoActionError(SearchError):
    http_status = 500
