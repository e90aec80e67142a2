"""Tests for the I18nService translation lookup and fallback."""

from __future__ import annotations

from pathlib import Path

from moviesearch.i18n import I18nService


def test_gettext_returns_translated_string(tmp_path: Path):
    locale_dir = tmp_path / "locales"
    locale_dir.mkdir()
    (locale_dir / "en.json").write_text('{"greet": "Hello {name}"}', encoding="utf-8")
    service = I18nService(locales_path=locale_dir, default_locale="en")

    text = service.gettext("greet", name="World")
    assert text == "Hello World"


def test_gettext_falls_back_to_default(tmp_path: Path):
    locale_dir = tmp_path / "locales"
    locale_dir.mkdir()
    (locale_dir / "en.json").write_text('{"greet": "Hello"}', encoding="utf-8")
    (locale_dir / "de.json").write_text('{"greet": "Hallo"}', encoding="utf-8")
    service = I18nService(locales_path=locale_dir, default_locale="en")

    assert service.gettext("greet", locale="es") == "Hello"
    assert service.gettext("greet", locale="de-AT") == "Hallo"
    assert service.gettext("missing.key") == "missing.key"


def test_bundled_locale_has_search_texts():
    service = I18nService()

    assert service.gettext("search.empty_prompt") == "Search for your favorite movies!"
    assert service.gettext("search.loading", query="Batman") == 'Searching for "Batman"...'


def test_locale_tables_are_cached_per_service(tmp_path: Path):
    first_dir = tmp_path / "first"
    second_dir = tmp_path / "second"
    for directory, text in ((first_dir, "Hello"), (second_dir, "Howdy")):
        directory.mkdir()
        (directory / "en.json").write_text(f'{{"greet": "{text}"}}', encoding="utf-8")

    first = I18nService(locales_path=first_dir)
    second = I18nService(locales_path=second_dir)

    assert first.gettext("greet") == "Hello"
    assert second.gettext("greet") == "Howdy"

    (first_dir / "en.json").write_text('{"greet": "Changed"}', encoding="utf-8")
    assert first.gettext("greet") == "Hello"
