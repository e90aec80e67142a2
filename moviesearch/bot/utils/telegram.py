"""Telegram sending helpers with retry support."""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable

from aiogram import Bot
from aiogram.exceptions import TelegramNetworkError, TelegramRetryAfter, TelegramServerError
from aiogram.types import Message

from moviesearch.logging import logger
from moviesearch.utils.retry import retry_async

TELEGRAM_SEND_MAX_ATTEMPTS = 3
TELEGRAM_SEND_BASE_DELAY = 0.3
# Longer flood waits are not worth holding a handler for.
TELEGRAM_MAX_FLOOD_WAIT = 30
TELEGRAM_RETRYABLE_ERRORS = (TelegramNetworkError, TelegramServerError)


async def _send_with_retry(send: Callable[[], Awaitable[Any]], operation_name: str) -> Any:
    async def _attempt():
        try:
            return await send()
        except TelegramRetryAfter as exc:
            if exc.retry_after > TELEGRAM_MAX_FLOOD_WAIT:
                raise
            logger.warning("telegram_flood_wait", operation=operation_name, retry_after=exc.retry_after)
            await asyncio.sleep(exc.retry_after)
            return await send()

    return await retry_async(
        _attempt,
        retry_on=TELEGRAM_RETRYABLE_ERRORS,
        max_attempts=TELEGRAM_SEND_MAX_ATTEMPTS,
        base_delay=TELEGRAM_SEND_BASE_DELAY,
        logger=logger,
        operation_name=operation_name,
    )


async def answer_with_retry(message: Message, text: str, **kwargs: Any) -> Any:
    """Reply in the message's chat, retrying transient Telegram failures."""

    return await _send_with_retry(lambda: message.answer(text, **kwargs), "telegram_answer")


async def bot_send_with_retry(bot: Bot, *, chat_id: int, text: str, **kwargs: Any) -> Any:
    return await _send_with_retry(
        lambda: bot.send_message(chat_id=chat_id, text=text, **kwargs),
        "telegram_send_message",
    )


__all__ = ["answer_with_retry", "bot_send_with_retry"]
