"""File-based localization table with in-memory caching."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path

from restaurant_finder.domain.models import Language, TextDirection, UIText

SUPPORTED_LANGUAGES: tuple[Language, ...] = (
    Language(code="en", name="English"),
    Language(code="es", name="Español"),
    Language(code="fr", name="Français"),
    Language(code="de", name="Deutsch"),
    Language(code="ar", name="العربية"),
)
RTL_LANGUAGE = "ar"


class LocalizationTable:
    """Resolves language codes to complete ``UIText`` records.

    Unknown codes resolve to the default locale. Locale files are layered
    over the default one, so a partially translated file still yields a
    fully populated record.
    """

    def __init__(
        self,
        *,
        locales_path: str | Path | None = None,
        default_locale: str = "en",
        languages: tuple[Language, ...] = SUPPORTED_LANGUAGES,
    ) -> None:
        self.locales_path = Path(locales_path or Path(__file__).with_name("locales"))
        self.default_locale = default_locale.lower()
        self.languages = languages

    def resolve(self, code: str | None) -> UIText:
        loc = self._normalize(code)
        table = dict(self._load_locale(self.default_locale))
        if loc != self.default_locale:
            table.update(self._load_locale(loc))
        return UIText.model_validate(table)

    def direction(self, code: str | None) -> TextDirection:
        if self._normalize(code) == RTL_LANGUAGE:
            return TextDirection.RTL
        return TextDirection.LTR

    def language(self, code: str | None) -> Language:
        loc = self._normalize(code)
        for language in self.languages:
            if language.code == loc:
                return language
        for language in self.languages:
            if language.code == self.default_locale:
                return language
        return Language(code=self.default_locale, name=self.default_locale)

    def is_supported(self, code: str | None) -> bool:
        loc = self._normalize(code)
        return any(language.code == loc for language in self.languages)

    @staticmethod
    def _normalize(code: str | None) -> str:
        return (code or "").strip().lower()

    @lru_cache(maxsize=16)
    def _load_locale(self, locale: str) -> dict[str, str]:
        if not locale.replace("-", "").isalnum():
            return {}
        file_path = self.locales_path / f"{locale}.json"
        if not file_path.exists():
            return {}
        with file_path.open("r", encoding="utf-8") as fp:
            return json.load(fp)


__all__ = ["LocalizationTable", "RTL_LANGUAGE", "SUPPORTED_LANGUAGES"]
