"""State holder behind a movie search screen."""

from __future__ import annotations

import asyncio
import contextlib
from dataclasses import replace
from typing import Callable, Protocol

from moviesearch.domain.models import SearchResult, SearchState
from moviesearch.logging import logger

EMPTY_QUERY_MESSAGE = "Please enter a movie title"
NO_RESULTS_MESSAGE = "No movies found"
FETCH_FAILED_MESSAGE = "Failed to fetch movies"

StateListener = Callable[[SearchState], None]


class MovieSearchRepository(Protocol):
    async def search_movies(self, query: str) -> SearchResult: ...


class SearchController:
    """Owns one :class:`SearchState` and the search currently in flight.

    Every transition replaces the state snapshot and notifies subscribers.
    Each valid ``trigger_search`` call bumps a generation counter and cancels
    the previous request; a response is applied only if its generation is
    still the latest one and the controller has not been closed.
    """

    def __init__(self, repository: MovieSearchRepository) -> None:
        self._repository = repository
        self._state = SearchState()
        self._listeners: list[StateListener] = []
        self._generation = 0
        self._task: asyncio.Task[SearchState | None] | None = None
        self._closed = False

    @property
    def state(self) -> SearchState:
        return self._state

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def in_flight(self) -> asyncio.Task[SearchState | None] | None:
        return self._task

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register ``listener`` for state replacements; returns an unsubscribe callable."""

        if self._closed:
            return lambda: None
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            with contextlib.suppress(ValueError):
                self._listeners.remove(listener)

        return _unsubscribe

    def on_query_change(self, text: str) -> None:
        if self._closed:
            return
        self._set_state(replace(self._state, query=text))

    def trigger_search(self) -> asyncio.Task[SearchState | None] | None:
        """Start a search for the current query.

        Returns the scheduled task, or ``None`` when the query is blank (the
        validation message is set synchronously) or the controller is closed.
        The task resolves to the new state, or ``None`` if its response was
        discarded.
        """

        if self._closed:
            return None

        query = self._state.query
        if not query.strip():
            self._set_state(replace(self._state, error_message=EMPTY_QUERY_MESSAGE))
            return None

        loop = asyncio.get_running_loop()
        self._cancel_in_flight()
        self._generation += 1
        generation = self._generation

        self._set_state(replace(self._state, is_loading=True, error_message=None))
        task = loop.create_task(self._search(generation, query))
        self._task = task
        task.add_done_callback(self._forget_task)
        return task

    def clear_error(self) -> None:
        if self._closed:
            return
        self._set_state(replace(self._state, error_message=None))

    def close(self) -> None:
        """Tear down: cancel the pending request and stop notifying."""

        if self._closed:
            return
        self._closed = True
        self._generation += 1
        self._cancel_in_flight()
        self._listeners.clear()

    async def _search(self, generation: int, query: str) -> SearchState | None:
        try:
            result = await self._repository.search_movies(query)
        except Exception:
            logger.exception("movie_repository_error", query=query)
            result = SearchResult(succeeded=False)

        if self._closed or generation != self._generation:
            logger.info("search_result_discarded", query=query, generation=generation)
            return None

        self._set_state(self._apply_result(result))
        return self._state

    def _apply_result(self, result: SearchResult) -> SearchState:
        state = replace(self._state, is_loading=False)
        if not result.succeeded:
            return replace(state, results=(), error_message=result.error or FETCH_FAILED_MESSAGE)

        items = tuple(result.items or ())
        if not items:
            return replace(state, results=(), error_message=NO_RESULTS_MESSAGE)
        return replace(state, results=items, error_message=None)

    def _cancel_in_flight(self) -> None:
        task = self._task
        self._task = None
        if task is not None and not task.done():
            task.cancel()

    def _forget_task(self, task: asyncio.Task[SearchState | None]) -> None:
        if self._task is task:
            self._task = None

    def _set_state(self, state: SearchState) -> None:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("search_listener_failed")


__all__ = [
    "EMPTY_QUERY_MESSAGE",
    "FETCH_FAILED_MESSAGE",
    "NO_RESULTS_MESSAGE",
    "MovieSearchRepository",
    "SearchController",
    "StateListener",
]
