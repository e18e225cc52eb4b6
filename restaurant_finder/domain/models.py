"""Pydantic models and session state shared across the bot and services."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Restaurant(BaseModel):
    """A restaurant suggestion returned by the search provider."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Restaurant name")
    cuisine: str = Field(..., description="Type of cuisine served")
    description: str = Field(..., description="One or two sentences about the place")


class Coordinates(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class Language(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    name: str


class TextDirection(str, Enum):
    LTR = "ltr"
    RTL = "rtl"


class UIText(BaseModel):
    """Every display string the bot needs for one language."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    title: str
    subtitle: str
    find_button: str
    loading_button: str
    loader_message: str
    welcome_message: str
    no_results_message: str
    fetch_error: str
    location_error: str
    location_not_supported: str
    location_permission_denied: str
    location_unavailable: str
    location_timeout: str
    manual_location_prompt: str
    manual_location_placeholder: str
    manual_location_error: str
    share_location_prompt: str
    share_location_button: str
    decline_location_button: str
    language_prompt: str
    language_changed: str
    throttle_notice: str


class MessageKey(str, Enum):
    """User-facing error messages; values name the matching ``UIText`` field."""

    LOCATION_NOT_SUPPORTED = "location_not_supported"
    LOCATION_PERMISSION_DENIED = "location_permission_denied"
    LOCATION_UNAVAILABLE = "location_unavailable"
    LOCATION_TIMEOUT = "location_timeout"
    LOCATION_ERROR = "location_error"
    MANUAL_LOCATION_ERROR = "manual_location_error"
    FETCH_ERROR = "fetch_error"

    def text(self, ui_text: UIText) -> str:
        return getattr(ui_text, self.value)


class Phase(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"
    RESULTS = "results"
    MANUAL_PROMPT = "manual_prompt"


@dataclass(frozen=True, slots=True)
class SearchSession:
    """Snapshot of the orchestrator state; replaced wholesale on every transition."""

    phase: Phase = Phase.IDLE
    restaurants: tuple[Restaurant, ...] = ()
    error_message: MessageKey | None = None
    manual_query: str = ""
    show_manual_entry: bool = False

    @property
    def loading(self) -> bool:
        return self.phase is Phase.LOADING


__all__ = [
    "Coordinates",
    "Language",
    "MessageKey",
    "Phase",
    "Restaurant",
    "SearchSession",
    "TextDirection",
    "UIText",
]
