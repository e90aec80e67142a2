"""Telegram handlers for the movie search screen."""

from __future__ import annotations

import asyncio

from aiogram import F, Router
from aiogram.filters import Command, CommandObject, CommandStart
from aiogram.types import Message
from structlog.contextvars import bound_contextvars

from moviesearch.bot.utils.messages import render_search_state
from moviesearch.bot.utils.telegram import answer_with_retry
from moviesearch.domain.models import SearchState
from moviesearch.i18n import I18nService
from moviesearch.logging import logger
from moviesearch.services.sessions import SearchSessionRegistry
from moviesearch.viewmodel.search import SearchController

router = Router(name="search")


def _locale(message: Message) -> str | None:
    user = message.from_user
    return user.language_code if user is not None else None


async def _answer_state(
    message: Message,
    state: SearchState,
    i18n: I18nService,
    *,
    query: str | None = None,
) -> None:
    for chunk in render_search_state(state, i18n, _locale(message), query=query):
        await answer_with_retry(message, chunk, parse_mode=None)


async def _search(message: Message, controller: SearchController, i18n: I18nService) -> None:
    # state.query follows later chat input, so keep the text this search was issued for.
    query = controller.state.query
    task = controller.trigger_search()
    if task is None:
        error = controller.state.error_message
        if error and not controller.closed:
            await answer_with_retry(message, error, parse_mode=None)
        return

    await _answer_state(message, controller.state, i18n, query=query)
    await asyncio.wait({task})
    if task.cancelled():
        event = "search_cancelled" if controller.closed else "search_superseded"
        logger.info(event, query=query)
        return

    state = task.result()
    if state is None:
        return
    logger.info(
        "search_completed",
        query=query,
        results=len(state.results),
        error=state.error_message,
    )
    await _answer_state(message, state, i18n, query=query)


@router.message(CommandStart())
async def handle_start(message: Message, i18n: I18nService) -> None:
    locale = _locale(message)
    name = message.from_user.full_name if message.from_user is not None else ""
    greeting = i18n.gettext("start.greeting", locale=locale, name=name)
    prompt = i18n.gettext("search.empty_prompt", locale=locale)
    await answer_with_retry(message, f"{greeting}\n\n{prompt}", parse_mode=None)


@router.message(Command("help"))
async def handle_help(message: Message, i18n: I18nService) -> None:
    await answer_with_retry(message, i18n.gettext("help.text", locale=_locale(message)), parse_mode=None)


@router.message(Command("search"))
async def handle_search_command(
    message: Message,
    command: CommandObject,
    sessions: SearchSessionRegistry,
    i18n: I18nService,
) -> None:
    with bound_contextvars(chat_id=message.chat.id):
        controller = sessions.get(message.chat.id)
        controller.on_query_change(command.args or "")
        await _search(message, controller, i18n)


@router.message(Command("clear"))
async def handle_clear(message: Message, sessions: SearchSessionRegistry, i18n: I18nService) -> None:
    controller = sessions.find(message.chat.id)
    if controller is not None:
        controller.clear_error()
    await answer_with_retry(message, i18n.gettext("clear.done", locale=_locale(message)), parse_mode=None)


@router.message(Command("reset"))
async def handle_reset(message: Message, sessions: SearchSessionRegistry, i18n: I18nService) -> None:
    key = "reset.done" if sessions.close(message.chat.id) else "reset.nothing"
    await answer_with_retry(message, i18n.gettext(key, locale=_locale(message)), parse_mode=None)


@router.message(F.text & ~F.text.startswith("/"))
async def handle_query(message: Message, sessions: SearchSessionRegistry, i18n: I18nService) -> None:
    with bound_contextvars(chat_id=message.chat.id):
        controller = sessions.get(message.chat.id)
        controller.on_query_change(message.text or "")
        await _search(message, controller, i18n)


__all__ = [
    "handle_clear",
    "handle_help",
    "handle_query",
    "handle_reset",
    "handle_search_command",
    "handle_start",
    "router",
]
