"""Tests for environment-driven settings."""

from __future__ import annotations

from pydantic import SecretStr

from restaurant_finder.config import GEMINI_OPENAI_BASE_URL, FinderSettings, LLMSettings, OpenAICompatibleSettings


def test_settings_read_prefixed_environment(monkeypatch):
    monkeypatch.setenv("FINDER_TELEGRAM_TOKEN", "123:ABC")
    monkeypatch.setenv("FINDER_LOCATION_TIMEOUT_SECONDS", "15")
    monkeypatch.setenv("FINDER_LLM__PROVIDER", "openai")
    monkeypatch.setenv("FINDER_LLM__MODEL", "gpt-4o-mini")
    monkeypatch.setenv("FINDER_REQUEST_LIMIT__MAX_REQUESTS", "3")
    monkeypatch.setenv("FINDER_MAX_CHAT_SESSIONS", "500")

    settings = FinderSettings(_env_file=None)

    assert settings.telegram_token.get_secret_value() == "123:ABC"
    assert settings.location_timeout_seconds == 15
    assert settings.llm.provider == "openai"
    assert settings.llm.model == "gpt-4o-mini"
    assert settings.request_limit.max_requests == 3
    assert settings.max_chat_sessions == 500
    assert settings.default_language == "en"


def test_gemini_credentials_default_to_openai_compatible_endpoint():
    llm = LLMSettings(gemini=OpenAICompatibleSettings(api_key=SecretStr("g-key")))

    api_key, base_url = llm.openai_like_credentials("gemini")

    assert api_key.get_secret_value() == "g-key"
    assert base_url == GEMINI_OPENAI_BASE_URL


def test_custom_credentials_fall_back_to_openai():
    llm = LLMSettings(
        provider="custom",
        openai=OpenAICompatibleSettings(api_key=SecretStr("sk"), base_url="https://llm.example/v1"),
    )

    api_key, base_url = llm.openai_like_credentials("custom")

    assert api_key.get_secret_value() == "sk"
    assert base_url == "https://llm.example/v1"
