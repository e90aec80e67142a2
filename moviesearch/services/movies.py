"""Movie search repository."""

from __future__ import annotations

from typing import Any, Protocol

from moviesearch.domain.models import SearchResult
from moviesearch.logging import logger

UNKNOWN_ERROR_MESSAGE = "Unknown error occurred"


class MovieSearchSource(Protocol):
    async def fetch(self, api_key: str, query: str) -> SearchResult: ...


class MovieRepository:
    """Single normalization boundary between the OMDb client and callers.

    ``search_movies`` never raises: every client failure comes back as a
    ``SearchResult`` with ``succeeded=False``.
    """

    def __init__(self, source: MovieSearchSource, api_key: Any) -> None:
        self._source = source
        self._api_key = self._read_secret(api_key)

    @staticmethod
    def _read_secret(secret: Any) -> str:
        try:
            return secret.get_secret_value()
        except AttributeError:
            return str(secret)

    async def search_movies(self, query: str) -> SearchResult:
        try:
            return await self._source.fetch(self._api_key, query)
        except Exception as exc:
            message = str(exc).strip() or UNKNOWN_ERROR_MESSAGE
            logger.warning(
                "movie_search_failed",
                query=query,
                error_type=exc.__class__.__name__,
                error=message,
            )
            return SearchResult.failure(message)


__all__ = ["MovieRepository", "MovieSearchSource", "UNKNOWN_ERROR_MESSAGE"]
