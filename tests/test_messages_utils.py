"""Tests for search state rendering helpers."""

from __future__ import annotations

import pytest

from moviesearch.bot.utils import messages
from moviesearch.domain.models import MovieSummary, SearchState
from moviesearch.i18n import I18nService


@pytest.fixture
def i18n() -> I18nService:
    return I18nService(default_locale="en")


def _movie(title: str = "Batman", poster: str = "https://img.example/batman.jpg", kind: str | None = "movie"):
    return MovieSummary(
        title=title,
        year="1989",
        external_id="tt0096895",
        poster_url=poster,
        kind=kind,
    )


def test_format_movie_card_includes_badge_and_poster(i18n):
    card = messages.format_movie_card(_movie(), 1, i18n=i18n)

    assert card.splitlines() == [
        "1. Batman (1989)",
        "[MOVIE]",
        "Poster: https://img.example/batman.jpg",
    ]


def test_format_movie_card_skips_placeholder_poster_and_missing_kind(i18n):
    card = messages.format_movie_card(_movie(poster="N/A", kind=None), 3, i18n=i18n)

    assert card == "3. Batman (1989)"


def test_render_results(i18n):
    state = SearchState(query=" Batman ", results=(_movie(), _movie("Batman Returns")))

    chunks = messages.render_search_state(state, i18n)

    assert len(chunks) == 1
    assert chunks[0].startswith('Results for "Batman" (2):')
    assert "2. Batman Returns (1989)" in chunks[0]


def test_render_error_loading_and_empty(i18n):
    assert messages.render_search_state(SearchState(error_message="Movie not found!"), i18n) == [
        "Movie not found!"
    ]
    assert messages.render_search_state(SearchState(query="Batman", is_loading=True), i18n) == [
        'Searching for "Batman"...'
    ]
    assert messages.render_search_state(SearchState(), i18n) == ["Search for your favorite movies!"]


def test_render_uses_searched_query_over_newer_input(i18n):
    state = SearchState(query="Superman", results=(_movie(),))

    text = messages.render_search_state(state, i18n, query="Batman")[0]
    loading = messages.render_search_state(
        SearchState(query="", is_loading=True), i18n, query=" Batman "
    )

    assert text.startswith('Results for "Batman" (1):')
    assert loading == ['Searching for "Batman"...']


def test_split_message_packs_blocks_within_limit():
    text = "\n\n".join(["a" * 4, "b" * 4, "c" * 4])

    assert messages.split_message(text, limit=9) == ["aaaa", "bbbb", "cccc"]
    assert messages.split_message(text, limit=10) == ["aaaa\n\nbbbb", "cccc"]


def test_split_message_hard_splits_oversized_block():
    chunks = messages.split_message("x" * 25 + "\n\nend", limit=10)

    assert chunks == ["x" * 10, "x" * 10, "x" * 5 + "\n\nend"]
    assert all(len(chunk) <= 10 for chunk in chunks)


def test_render_splits_long_result_lists(i18n):
    results = tuple(_movie(f"Movie {index:03d}" + "!" * 80) for index in range(100))

    chunks = messages.render_search_state(SearchState(query="Movie", results=results), i18n)

    assert len(chunks) > 1
    assert all(len(chunk) <= messages.TELEGRAM_MESSAGE_LIMIT for chunk in chunks)
    assert sum(chunk.count("[MOVIE]") for chunk in chunks) == 100
