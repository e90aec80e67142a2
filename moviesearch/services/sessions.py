"""Per-chat search controllers."""

from __future__ import annotations

from collections import OrderedDict

from moviesearch.domain.models import SearchState
from moviesearch.logging import logger
from moviesearch.viewmodel.search import MovieSearchRepository, SearchController

DEFAULT_MAX_SESSIONS = 1000


class SearchSessionRegistry:
    """Keeps one :class:`SearchController` per Telegram chat.

    A chat plays the role of a search screen: its controller is created on
    the first search and lives until ``/reset``, shutdown or eviction. At
    most ``max_sessions`` controllers are kept; the least recently used idle
    one is closed first, a busy one only when every session is busy.
    """

    def __init__(
        self,
        repository: MovieSearchRepository,
        *,
        max_sessions: int = DEFAULT_MAX_SESSIONS,
    ) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self._repository = repository
        self._max_sessions = max_sessions
        self._controllers: OrderedDict[int, SearchController] = OrderedDict()

    def __len__(self) -> int:
        return len(self._controllers)

    def __contains__(self, chat_id: object) -> bool:
        return chat_id in self._controllers

    def find(self, chat_id: int) -> SearchController | None:
        """Return the chat's controller without creating one."""

        controller = self._controllers.get(chat_id)
        if controller is not None:
            self._controllers.move_to_end(chat_id)
        return controller

    def get(self, chat_id: int) -> SearchController:
        controller = self.find(chat_id)
        if controller is None:
            controller = SearchController(self._repository)
            controller.subscribe(_state_logger(chat_id))
            self._controllers[chat_id] = controller
            logger.debug("search_session_opened", chat_id=chat_id)
            self._evict(keep=chat_id)
        return controller

    def close(self, chat_id: int) -> bool:
        controller = self._controllers.pop(chat_id, None)
        if controller is None:
            return False
        controller.close()
        logger.debug("search_session_closed", chat_id=chat_id)
        return True

    def close_all(self) -> None:
        for chat_id in list(self._controllers):
            self.close(chat_id)

    def _evict(self, *, keep: int) -> None:
        while len(self._controllers) > self._max_sessions:
            candidates = [chat_id for chat_id in self._controllers if chat_id != keep]
            victim = next(
                (chat_id for chat_id in candidates if self._controllers[chat_id].in_flight is None),
                candidates[0],
            )
            self.close(victim)
            logger.info("search_session_evicted", chat_id=victim, max_sessions=self._max_sessions)


def _state_logger(chat_id: int):
    def _log(state: SearchState) -> None:
        logger.debug(
            "search_state_changed",
            chat_id=chat_id,
            query=state.query,
            is_loading=state.is_loading,
            results=len(state.results),
            error=state.error_message,
        )

    return _log


__all__ = ["DEFAULT_MAX_SESSIONS", "SearchSessionRegistry"]
