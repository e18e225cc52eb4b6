from restaurant_finder.i18n.service import RTL_LANGUAGE, SUPPORTED_LANGUAGES, LocalizationTable

__all__ = ["LocalizationTable", "RTL_LANGUAGE", "SUPPORTED_LANGUAGES"]
