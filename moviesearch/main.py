"""Application entrypoint."""

from __future__ import annotations

import asyncio

import httpx
from aiogram import Bot, Dispatcher
from aiogram.client.session.aiohttp import AiohttpSession

from moviesearch.bot.middlewares import ThrottleMiddleware
from moviesearch.bot.routers import setup_routers
from moviesearch.config import get_settings
from moviesearch.i18n import I18nService
from moviesearch.logging import configure_logging, logger
from moviesearch.services.error_monitor import ErrorMonitor
from moviesearch.services.movies import MovieRepository
from moviesearch.services.omdb import OmdbClient
from moviesearch.services.sessions import SearchSessionRegistry


async def main() -> None:
    settings = get_settings()
    configure_logging(json_logs=settings.environment != "dev")

    session = (
        AiohttpSession(proxy=settings.telegram_proxy) if settings.telegram_proxy else None
    )
    bot = Bot(token=settings.telegram_token.get_secret_value(), session=session)
    dp = Dispatcher()
    dp.include_router(setup_routers())
    error_monitor = ErrorMonitor(settings=settings)
    dp.errors.register(error_monitor.handle_error)
    dp.message.middleware(ThrottleMiddleware(settings.request_limit))

    i18n = I18nService(default_locale=settings.default_language)
    async with httpx.AsyncClient() as http_client:
        omdb = OmdbClient.from_settings(http_client, settings.omdb)
        repository = MovieRepository(omdb, api_key=settings.omdb.api_key)
        sessions = SearchSessionRegistry(repository, max_sessions=settings.max_search_sessions)

        logger.info("bot_starting", environment=settings.environment)
        try:
            await dp.start_polling(bot, sessions=sessions, i18n=i18n)
        finally:
            sessions.close_all()
            logger.info("bot_stopped", environment=settings.environment)


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
