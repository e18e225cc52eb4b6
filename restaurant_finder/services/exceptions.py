"""Domain-specific exceptions."""

from __future__ import annotations

from enum import Enum


class ServiceError(Exception):
    pass


class ProviderError(ServiceError):
    """The restaurant search backend failed or returned an unusable response."""


class LocationFailure(str, Enum):
    PERMISSION_DENIED = "permission_denied"
    POSITION_UNAVAILABLE = "position_unavailable"
    TIMEOUT = "timeout"
    UNKNOWN = "unknown"


class LocationError(ServiceError):
    def __init__(self, failure: LocationFailure, detail: str | None = None) -> None:
        super().__init__(detail or failure.value)
        self.failure = failure
