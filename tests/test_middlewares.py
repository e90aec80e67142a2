"""Tests for the throttle middleware."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from moviesearch.bot.middlewares import throttle as throttle_module
from moviesearch.bot.middlewares.throttle import THROTTLED_TEXT, ThrottleMiddleware
from moviesearch.config import RequestLimitSettings


class DummyMessage:
    def __init__(self, user_id: int | None = 1) -> None:
        self.from_user = SimpleNamespace(id=user_id) if user_id is not None else None
        self.answers: list[tuple[str, str | None]] = []

    async def answer(self, text: str, parse_mode: str | None = None):
        self.answers.append((text, parse_mode))
        return text


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture(autouse=True)
def patch_aiogram_message(monkeypatch):
    monkeypatch.setattr(throttle_module, "Message", DummyMessage)


async def _handler(event, data):
    data.setdefault("handled", 0)
    data["handled"] += 1
    return "ok"


@pytest.mark.asyncio
async def test_throttle_blocks_after_limit_and_recovers():
    clock = FakeClock()
    middleware = ThrottleMiddleware(RequestLimitSettings(max_requests=2, interval_seconds=10), clock=clock)
    message = DummyMessage()
    data: dict = {}

    assert await middleware(_handler, message, data) == "ok"
    assert await middleware(_handler, message, data) == "ok"
    assert await middleware(_handler, message, data) is None
    assert message.answers == [(THROTTLED_TEXT, None)]
    assert data["handled"] == 2

    clock.now = 11.0
    assert await middleware(_handler, message, data) == "ok"
    assert data["handled"] == 3


@pytest.mark.asyncio
async def test_throttle_tracks_users_independently():
    middleware = ThrottleMiddleware(RequestLimitSettings(max_requests=1, interval_seconds=10), clock=FakeClock())

    assert await middleware(_handler, DummyMessage(user_id=1), {}) == "ok"
    assert await middleware(_handler, DummyMessage(user_id=2), {}) == "ok"


@pytest.mark.asyncio
async def test_throttle_disabled_or_anonymous_passes_through():
    disabled = ThrottleMiddleware(RequestLimitSettings(max_requests=0))
    limited = ThrottleMiddleware(RequestLimitSettings(max_requests=1))

    for _ in range(3):
        assert await disabled(_handler, DummyMessage(), {}) == "ok"
        assert await limited(_handler, DummyMessage(user_id=None), {}) == "ok"
