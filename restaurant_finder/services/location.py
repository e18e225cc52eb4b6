"""One-shot location acquisition built on top of callback-style platform APIs."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Protocol

from pydantic import ValidationError

from restaurant_finder.domain.models import Coordinates
from restaurant_finder.services.exceptions import LocationError, LocationFailure


class LocationProvider(Protocol):
    def is_supported(self) -> bool: ...

    async def acquire(self) -> Coordinates: ...


class CallbackLocationProvider:
    """Adapts a success/failure callback pair into a single awaitable request.

    ``request`` asks the platform for a position (for Telegram: sends the
    share-location keyboard). The platform later calls :meth:`resolve` or
    :meth:`reject`; whichever comes first settles the pending request and
    later calls are ignored.
    """

    def __init__(
        self,
        *,
        request: Callable[[], Awaitable[None]],
        supported: bool = True,
        timeout_seconds: float | None = None,
    ) -> None:
        self._request = request
        self._supported = supported
        self._timeout = timeout_seconds
        self._pending: asyncio.Future[Coordinates] | None = None

    def is_supported(self) -> bool:
        return self._supported

    @property
    def pending(self) -> bool:
        return self._pending is not None and not self._pending.done()

    async def acquire(self) -> Coordinates:
        if not self._supported:
            raise RuntimeError("Location is not supported here; check is_supported() first.")
        if self.pending:
            self.reject(LocationFailure.UNKNOWN, "superseded by a newer location request")

        future: asyncio.Future[Coordinates] = asyncio.get_running_loop().create_future()
        self._pending = future
        try:
            await self._request()
            return await asyncio.wait_for(future, self._timeout)
        except asyncio.TimeoutError as exc:
            raise LocationError(LocationFailure.TIMEOUT) from exc
        except LocationError:
            raise
        except Exception as exc:
            raise LocationError(LocationFailure.UNKNOWN, str(exc)) from exc
        finally:
            if self._pending is future:
                self._pending = None

    def resolve(self, latitude: float, longitude: float) -> bool:
        """Settle the pending request with a position; returns False if nothing was waiting."""

        if not self.pending:
            return False
        try:
            coordinates = Coordinates(latitude=latitude, longitude=longitude)
        except ValidationError:
            self._pending.set_exception(
                LocationError(
                    LocationFailure.POSITION_UNAVAILABLE,
                    f"coordinates out of range: {latitude}, {longitude}",
                )
            )
        else:
            self._pending.set_result(coordinates)
        return True

    def reject(self, failure: LocationFailure, detail: str | None = None) -> bool:
        if not self.pending:
            return False
        self._pending.set_exception(LocationError(failure, detail))
        return True


__all__ = ["CallbackLocationProvider", "LocationProvider"]
