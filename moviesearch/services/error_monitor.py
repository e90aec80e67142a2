"""Notify the administrator about unhandled bot errors."""

from __future__ import annotations

import traceback

from aiogram import Bot
from aiogram.dispatcher.event.bases import UNHANDLED
from aiogram.types import ErrorEvent, Update

from moviesearch.bot.utils.messages import TELEGRAM_MESSAGE_LIMIT
from moviesearch.bot.utils.telegram import bot_send_with_retry
from moviesearch.config import Settings
from moviesearch.logging import logger

TRACEBACK_CHAR_LIMIT = 1800


class ErrorMonitor:
    """Error observer registered on the dispatcher via ``handle_error``."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    async def handle_error(self, event: ErrorEvent, bot: Bot):
        update_id = getattr(event.update, "update_id", None)
        logger.error(
            "bot_error_captured",
            exception_type=event.exception.__class__.__name__,
            exception=str(event.exception),
            update_id=update_id,
        )

        admin_id = self._settings.admin_telegram_id
        if admin_id is None:
            return UNHANDLED

        try:
            await bot_send_with_retry(
                bot, chat_id=admin_id, text=self._build_message(event), parse_mode=None
            )
        except Exception:
            logger.exception("error_monitor_notification_failed", update_id=update_id)
        return UNHANDLED

    def _build_message(self, event: ErrorEvent) -> str:
        exception = event.exception
        lines = [
            "MOVIE SEARCH BOT ERROR",
            f"Environment: {self._settings.environment}",
            f"Exception: {exception.__class__.__name__}: {exception}",
            f"Update ID: {getattr(event.update, 'update_id', 'unknown')}",
            f"Origin: {self._describe_origin(event.update)}",
        ]
        trace = self._format_traceback(exception)
        if trace:
            lines.extend(["", "Traceback:", trace])

        text = "\n".join(lines).strip()
        return _truncate(text, TELEGRAM_MESSAGE_LIMIT)

    @staticmethod
    def _describe_origin(update: Update | None) -> str:
        message = getattr(update, "message", None)
        if message is None:
            return "unknown"
        segments = [f"chat {message.chat.id}"]
        user = message.from_user
        if user is not None:
            segments.append(f"user {user.id}")
            if user.username:
                segments.append(f"@{user.username}")
        if message.text:
            segments.append(f"text {_truncate(message.text, 200)!r}")
        return " | ".join(segments)

    @staticmethod
    def _format_traceback(exception: BaseException) -> str:
        trace = "".join(
            traceback.format_exception(exception.__class__, exception, exception.__traceback__)
        ).strip()
        return _truncate(trace, TRACEBACK_CHAR_LIMIT) if trace else ""


def _truncate(value: str, limit: int) -> str:
    value = value.strip()
    if len(value) <= limit:
        return value
    return f"{value[: limit - 15].rstrip()}\n...[truncated]"


__all__ = ["ErrorMonitor"]
