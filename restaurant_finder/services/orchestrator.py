"""Location acquisition and search orchestration for a single chat."""

from __future__ import annotations

from dataclasses import replace
from typing import Awaitable, Callable, Protocol, Sequence

from restaurant_finder.domain.models import (
    Language,
    MessageKey,
    Phase,
    Restaurant,
    SearchSession,
    TextDirection,
    UIText,
)
from restaurant_finder.i18n import LocalizationTable
from restaurant_finder.logging import logger
from restaurant_finder.services.exceptions import LocationError, LocationFailure
from restaurant_finder.services.location import LocationProvider

LOCATION_FAILURE_MESSAGES: dict[LocationFailure, MessageKey] = {
    LocationFailure.PERMISSION_DENIED: MessageKey.LOCATION_PERMISSION_DENIED,
    LocationFailure.POSITION_UNAVAILABLE: MessageKey.LOCATION_UNAVAILABLE,
    LocationFailure.TIMEOUT: MessageKey.LOCATION_TIMEOUT,
    LocationFailure.UNKNOWN: MessageKey.LOCATION_ERROR,
}


class SearchProvider(Protocol):
    async def by_coordinates(
        self, latitude: float, longitude: float, language_code: str
    ) -> Sequence[Restaurant]: ...

    async def by_query(self, location: str, language_code: str) -> Sequence[Restaurant]: ...


SessionListener = Callable[[SearchSession, UIText, TextDirection], Awaitable[None]]


class SearchOrchestrator:
    """Owns one chat's search session and drives it through its phases.

    Every transition replaces the session snapshot and publishes it to the
    listener. Each search captures a generation number; completions from a
    superseded search are dropped so the latest user action wins.
    """

    def __init__(
        self,
        *,
        search_provider: SearchProvider,
        location_provider: LocationProvider,
        localization: LocalizationTable,
        language: str | None = None,
        listener: SessionListener | None = None,
    ) -> None:
        self._search = search_provider
        self._location = location_provider
        self._localization = localization
        self._listener = listener
        self._session = SearchSession()
        self._generation = 0
        self._language = localization.language(language or localization.default_locale)
        self._texts = localization.resolve(self._language.code)
        self._direction = localization.direction(self._language.code)

    @property
    def session(self) -> SearchSession:
        return self._session

    @property
    def language(self) -> Language:
        return self._language

    @property
    def texts(self) -> UIText:
        return self._texts

    @property
    def direction(self) -> TextDirection:
        return self._direction

    def set_language(self, code: str) -> UIText:
        self._language = self._localization.language(code)
        self._texts = self._localization.resolve(self._language.code)
        self._direction = self._localization.direction(self._language.code)
        logger.info("language_changed", language=self._language.code, direction=self._direction.value)
        return self._texts

    async def run_automatic_search(self) -> SearchSession:
        generation = self._next_generation()
        await self._transition(
            phase=Phase.LOADING,
            restaurants=(),
            error_message=None,
            show_manual_entry=False,
        )
        if self._is_stale(generation):
            return self._session

        if not self._location.is_supported():
            logger.info("location_not_supported")
            await self._transition(
                phase=Phase.MANUAL_PROMPT,
                error_message=MessageKey.LOCATION_NOT_SUPPORTED,
                show_manual_entry=True,
            )
            return self._session

        try:
            coordinates = await self._location.acquire()
        except LocationError as exc:
            if self._is_stale(generation):
                return self._session
            logger.warning("location_acquire_failed", failure=exc.failure.value, detail=str(exc))
            await self._transition(
                phase=Phase.MANUAL_PROMPT,
                error_message=LOCATION_FAILURE_MESSAGES[exc.failure],
                show_manual_entry=True,
            )
            return self._session

        if self._is_stale(generation):
            return self._session
        logger.info("search_started", mode="coordinates", language=self._language.code)
        try:
            restaurants = await self._search.by_coordinates(
                coordinates.latitude, coordinates.longitude, self._language.code
            )
        except Exception:
            logger.exception("restaurant_search_failed", mode="coordinates")
            await self._complete(generation, error_message=MessageKey.FETCH_ERROR)
        else:
            await self._complete(generation, restaurants=restaurants)
        return self._session

    async def run_manual_search(self, text: str) -> SearchSession:
        generation = self._next_generation()
        query = text or ""
        if not query.strip():
            await self._transition(
                phase=Phase.ERROR,
                restaurants=(),
                error_message=MessageKey.MANUAL_LOCATION_ERROR,
                manual_query=query,
            )
            return self._session

        await self._transition(
            phase=Phase.LOADING,
            restaurants=(),
            error_message=None,
            manual_query=query,
        )
        if self._is_stale(generation):
            return self._session
        logger.info("search_started", mode="query", language=self._language.code)
        try:
            restaurants = await self._search.by_query(query, self._language.code)
        except Exception:
            logger.exception("restaurant_search_failed", mode="query")
            await self._complete(generation, error_message=MessageKey.FETCH_ERROR)
        else:
            await self._complete(generation, restaurants=restaurants)
        return self._session

    def _next_generation(self) -> int:
        self._generation += 1
        return self._generation

    def _is_stale(self, generation: int) -> bool:
        if generation == self._generation:
            return False
        logger.info("stale_search_discarded", generation=generation, current=self._generation)
        return True

    async def _complete(
        self,
        generation: int,
        *,
        restaurants: Sequence[Restaurant] = (),
        error_message: MessageKey | None = None,
    ) -> None:
        if self._is_stale(generation):
            return
        if error_message is not None:
            await self._transition(phase=Phase.ERROR, restaurants=(), error_message=error_message)
        else:
            await self._transition(
                phase=Phase.RESULTS, restaurants=tuple(restaurants), error_message=None
            )

    async def _transition(self, **changes) -> None:
        self._session = replace(self._session, **changes)
        if self._listener is None:
            return
        try:
            await self._listener(self._session, self._texts, self._direction)
        except Exception:
            logger.exception("session_publish_failed", phase=self._session.phase.value)


__all__ = [
    "LOCATION_FAILURE_MESSAGES",
    "SearchOrchestrator",
    "SearchProvider",
    "SessionListener",
]
