"""Runtime configuration based on environment variables."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field, HttpUrl, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

GEMINI_OPENAI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"


class OpenAICompatibleSettings(BaseModel):
    api_key: SecretStr | None = None
    base_url: HttpUrl | None = None


class AzureProviderSettings(BaseModel):
    api_key: SecretStr | None = None
    base_url: HttpUrl | None = None
    api_version: str | None = None


class LLMSettings(BaseModel):
    provider: Literal["gemini", "openai", "azure", "azure_openai", "custom", "anthropic"] = "gemini"
    model: str = "gemini-2.5-flash"
    api_key: SecretStr | None = None
    base_url: HttpUrl | None = None
    api_version: str | None = None
    openai: OpenAICompatibleSettings = Field(default_factory=OpenAICompatibleSettings)
    azure: AzureProviderSettings = Field(default_factory=AzureProviderSettings)
    gemini: OpenAICompatibleSettings = Field(default_factory=OpenAICompatibleSettings)
    custom: OpenAICompatibleSettings = Field(default_factory=OpenAICompatibleSettings)

    def openai_like_credentials(self, provider: str) -> tuple[SecretStr | None, str | None]:
        provider = provider.lower()
        if provider == "custom":
            api_key = self.custom.api_key or self.openai.api_key or self.api_key
            base_url = self.custom.base_url or self.openai.base_url or self.base_url
        elif provider == "gemini":
            api_key = self.gemini.api_key or self.api_key
            base_url = self.gemini.base_url or self.base_url or GEMINI_OPENAI_BASE_URL
        else:
            api_key = self.openai.api_key or self.api_key
            base_url = self.openai.base_url or self.base_url
        return api_key, str(base_url) if base_url else None


class RequestLimitSettings(BaseModel):
    max_requests: int = Field(default=5, ge=0)
    interval_seconds: int = Field(default=10, ge=1)


class FinderSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="FINDER_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    environment: Literal["dev", "staging", "prod"] = "dev"
    telegram_token: SecretStr
    telegram_proxy: str | None = None
    default_language: str = "en"
    admin_telegram_id: int | None = None
    location_timeout_seconds: float = Field(default=60.0, gt=0, le=600)
    max_results: int = Field(default=10, ge=1, le=30)
    max_chat_sessions: int = Field(default=10_000, ge=1)

    llm: LLMSettings = Field(default_factory=LLMSettings)
    request_limit: RequestLimitSettings = Field(default_factory=RequestLimitSettings)


@lru_cache
def get_settings() -> FinderSettings:
    """Return cached settings instance."""

    return FinderSettings()  # type: ignore[call-arg]


__all__ = [
    "AzureProviderSettings",
    "FinderSettings",
    "LLMSettings",
    "OpenAICompatibleSettings",
    "RequestLimitSettings",
    "get_settings",
]
