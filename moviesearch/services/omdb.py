"""HTTP client for the OMDb search endpoint."""

from __future__ import annotations

import httpx
from pydantic import ValidationError

from moviesearch.config import OmdbSettings
from moviesearch.domain.models import SearchResult
from moviesearch.services.exceptions import MovieApiError

ERROR_DETAIL_CHAR_LIMIT = 500


class OmdbClient:
    """Issues ``GET <base>/?apikey=...&s=...`` and parses the JSON body.

    Upstream "no results" answers (``Response: "False"``) are valid results
    and returned as-is. Transport problems, non-200 answers and payloads that
    do not look like a search result raise :class:`MovieApiError`.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        base_url: str = "https://www.omdbapi.com/",
        timeout: float | None = 10,
    ) -> None:
        self._client = http_client
        self._base_url = base_url
        self._timeout = timeout

    @classmethod
    def from_settings(cls, http_client: httpx.AsyncClient, settings: OmdbSettings) -> "OmdbClient":
        return cls(
            http_client,
            base_url=str(settings.base_url),
            timeout=settings.request_timeout_seconds,
        )

    async def fetch(self, api_key: str, query: str) -> SearchResult:
        params = {"apikey": api_key, "s": query}
        try:
            response = await self._client.get(
                self._base_url,
                params=params,
                timeout=self._timeout,
            )
        except httpx.TimeoutException as exc:
            raise MovieApiError("Movie API request timed out.") from exc
        except httpx.RequestError as exc:
            raise MovieApiError(f"Movie API request failed: {exc}") from exc

        if response.status_code != httpx.codes.OK:
            detail = response.text[:ERROR_DETAIL_CHAR_LIMIT].strip()
            message = f"Movie API request failed ({response.status_code})"
            raise MovieApiError(
                f"{message}: {detail}" if detail else message,
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise MovieApiError("Movie API response is not valid JSON.") from exc
        if not isinstance(payload, dict):
            raise MovieApiError("Movie API response format is invalid.")

        try:
            return SearchResult.model_validate(payload)
        except ValidationError as exc:
            raise MovieApiError("Movie API response format is invalid.") from exc


__all__ = ["OmdbClient"]
