"""Plain-text rendering of search state for Telegram."""

from __future__ import annotations

from moviesearch.domain.models import MovieSummary, SearchState
from moviesearch.i18n import I18nService

# Telegram messages are limited to 4096 characters.
TELEGRAM_MESSAGE_LIMIT = 4000


def split_message(text: str, limit: int = TELEGRAM_MESSAGE_LIMIT) -> list[str]:
    """Pack blank-line separated blocks into chunks of at most ``limit`` chars."""

    chunks: list[str] = []
    buffer = ""
    for block in text.split("\n\n"):
        block = block.strip()
        while len(block) > limit:
            if buffer:
                chunks.append(buffer)
                buffer = ""
            chunks.append(block[:limit])
            block = block[limit:].lstrip()
        if not block:
            continue

        candidate = f"{buffer}\n\n{block}" if buffer else block
        if len(candidate) > limit:
            chunks.append(buffer)
            buffer = block
        else:
            buffer = candidate

    if buffer:
        chunks.append(buffer)
    return chunks


def format_movie_card(
    movie: MovieSummary,
    position: int,
    *,
    i18n: I18nService,
    locale: str | None = None,
) -> str:
    lines = [f"{position}. {movie.title} ({movie.year})"]
    if movie.kind:
        lines.append(f"[{movie.kind.upper()}]")
    if movie.has_poster:
        lines.append(i18n.gettext("search.poster", locale=locale, url=movie.poster_url))
    return "\n".join(lines)


def render_search_state(
    state: SearchState,
    i18n: I18nService,
    locale: str | None = None,
    *,
    query: str | None = None,
) -> list[str]:
    """Render ``state`` as message chunks.

    ``query`` names the search the state belongs to; it defaults to
    ``state.query``, which may already hold newer input from the chat.
    """

    searched = (state.query if query is None else query).strip()
    if state.is_loading:
        return [i18n.gettext("search.loading", locale=locale, query=searched)]
    if state.error_message:
        return [state.error_message]
    if not state.results:
        return [i18n.gettext("search.empty_prompt", locale=locale)]

    blocks = [
        i18n.gettext(
            "search.results_header",
            locale=locale,
            query=searched,
            count=len(state.results),
        )
    ]
    blocks.extend(
        format_movie_card(movie, position, i18n=i18n, locale=locale)
        for position, movie in enumerate(state.results, start=1)
    )
    return split_message("\n\n".join(blocks))


__all__ = [
    "TELEGRAM_MESSAGE_LIMIT",
    "format_movie_card",
    "render_search_state",
    "split_message",
]
