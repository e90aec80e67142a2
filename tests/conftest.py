"""Shared pytest fixtures for the search service and bot tests."""

from __future__ import annotations

import asyncio

import pytest

from moviesearch.domain.models import SearchResult

BATMAN_PAYLOAD = {
    "Search": [
        {
            "Title": "Batman",
            "Year": "1989",
            "imdbID": "tt0096895",
            "Poster": "https://m.media-amazon.com/images/M/batman.jpg",
            "Type": "movie",
        }
    ],
    "totalResults": "1",
    "Response": "True",
}

NOT_FOUND_PAYLOAD = {"Response": "False", "Error": "Movie not found!"}


class FakeRepository:
    """Repository double returning canned results per query.

    When ``gate`` is set, every call blocks until the event is released so
    tests can observe the loading state.
    """

    def __init__(self, results: dict[str, SearchResult] | None = None) -> None:
        self.results = results or {}
        self.queries: list[str] = []
        self.gate: asyncio.Event | None = None

    async def search_movies(self, query: str) -> SearchResult:
        self.queries.append(query)
        if self.gate is not None:
            await self.gate.wait()
        return self.results.get(query, SearchResult.model_validate(NOT_FOUND_PAYLOAD))


@pytest.fixture
def batman_payload() -> dict:
    return {**BATMAN_PAYLOAD, "Search": [dict(item) for item in BATMAN_PAYLOAD["Search"]]}


@pytest.fixture
def repository(batman_payload) -> FakeRepository:
    return FakeRepository({"Batman": SearchResult.model_validate(batman_payload)})
