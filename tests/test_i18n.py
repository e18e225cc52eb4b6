"""Tests for the localization table lookup and fallback."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from restaurant_finder.domain.models import TextDirection, UIText
from restaurant_finder.i18n import SUPPORTED_LANGUAGES, LocalizationTable


@pytest.mark.parametrize("language", SUPPORTED_LANGUAGES, ids=lambda language: language.code)
def test_bundled_locales_are_complete(language):
    locale_file = Path(LocalizationTable().locales_path) / f"{language.code}.json"
    payload = json.loads(locale_file.read_text(encoding="utf-8"))

    assert set(payload) == set(UIText.model_fields)
    assert all(value.strip() for value in payload.values())


@pytest.mark.parametrize("code", ["en", "EN", "es", "xx", "", None, "zz-ZZ", "../en"])
def test_resolve_is_total(localization, code):
    texts = localization.resolve(code)

    assert isinstance(texts, UIText)
    assert all(getattr(texts, field) for field in UIText.model_fields)


def test_unknown_code_falls_back_to_default(localization):
    assert localization.resolve("xx") == localization.resolve("en")
    assert localization.language("xx").code == "en"


def test_resolve_returns_translation(localization):
    assert localization.resolve("es").loading_button == "Buscando..."
    assert localization.resolve("de").decline_location_button == "Nicht teilen"


def test_only_arabic_is_right_to_left(localization):
    assert localization.direction("ar") is TextDirection.RTL
    assert localization.direction("AR") is TextDirection.RTL
    for language in SUPPORTED_LANGUAGES:
        if language.code != "ar":
            assert localization.direction(language.code) is TextDirection.LTR
    assert localization.direction("he") is TextDirection.LTR


def test_partial_locale_is_filled_from_default(tmp_path: Path):
    bundled = LocalizationTable().locales_path
    (tmp_path / "en.json").write_text(
        (bundled / "en.json").read_text(encoding="utf-8"), encoding="utf-8"
    )
    (tmp_path / "it.json").write_text('{"loading_button": "Ricerca..."}', encoding="utf-8")
    table = LocalizationTable(locales_path=tmp_path)

    texts = table.resolve("it")

    assert texts.loading_button == "Ricerca..."
    assert texts.fetch_error == table.resolve("en").fetch_error


def test_language_lookup(localization):
    assert localization.language("FR").name == "Français"
    assert localization.is_supported("ar") is True
    assert localization.is_supported("pt") is False
