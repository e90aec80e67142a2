"""Per-user sliding-window throttle in front of the search handlers."""

from __future__ import annotations

import time
from collections import defaultdict, deque
from typing import Any, Awaitable, Callable, Deque, Dict

from aiogram import BaseMiddleware
from aiogram.types import Message, TelegramObject

from moviesearch.config import RequestLimitSettings
from moviesearch.logging import logger

THROTTLED_TEXT = "Too many searches, please slow down."


class ThrottleMiddleware(BaseMiddleware):
    def __init__(
        self,
        limits: RequestLimitSettings | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        limits = limits or RequestLimitSettings()
        self.window_seconds = limits.interval_seconds
        self.max_requests = limits.max_requests
        self._clock = clock
        self._events: Dict[int, Deque[float]] = defaultdict(deque)

    async def __call__(
        self,
        handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: Dict[str, Any],
    ) -> Any:
        if self.max_requests <= 0 or not isinstance(event, Message) or event.from_user is None:
            return await handler(event, data)

        user_id = event.from_user.id
        now = self._clock()
        bucket = self._events[user_id]
        while bucket and now - bucket[0] > self.window_seconds:
            bucket.popleft()

        if len(bucket) >= self.max_requests:
            logger.info("request_throttled", user_id=user_id, window_seconds=self.window_seconds)
            await event.answer(THROTTLED_TEXT, parse_mode=None)
            return None

        bucket.append(now)
        return await handler(event, data)


__all__ = ["ThrottleMiddleware", "THROTTLED_TEXT"]
