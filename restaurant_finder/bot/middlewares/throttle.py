"""Per-user throttle that keeps bursts of taps from flooding the search backend."""

from __future__ import annotations

import time
from collections import defaultdict, deque
from typing import Any, Awaitable, Callable, Deque, Dict

from aiogram import BaseMiddleware
from aiogram.types import CallbackQuery, Message, TelegramObject

from restaurant_finder.config import RequestLimitSettings
from restaurant_finder.i18n import LocalizationTable
from restaurant_finder.logging import logger

THROTTLE_NOTICE = "Too many requests, please slow down."


class ThrottleMiddleware(BaseMiddleware):
    def __init__(
        self,
        limits: RequestLimitSettings | None = None,
        localization: LocalizationTable | None = None,
    ) -> None:
        limits = limits or RequestLimitSettings()
        self.window_seconds = limits.interval_seconds
        self.max_requests = limits.max_requests
        self.localization = localization
        self._events: Dict[int, Deque[float]] = defaultdict(deque)

    async def __call__(
        self,
        handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: Dict[str, Any],
    ) -> Any:
        user_id = self._extract_user_id(event)
        if user_id is None or self.max_requests <= 0:
            return await handler(event, data)

        now = time.monotonic()
        bucket = self._events[user_id]
        while bucket and now - bucket[0] > self.window_seconds:
            bucket.popleft()

        if len(bucket) >= self.max_requests:
            logger.info("request_throttled", user_id=user_id)
            await self._notify_limit(event)
            return None

        bucket.append(now)
        return await handler(event, data)

    @staticmethod
    def _extract_user_id(event: TelegramObject) -> int | None:
        if isinstance(event, (Message, CallbackQuery)) and event.from_user is not None:
            return event.from_user.id
        return None

    def _notice(self, event: TelegramObject) -> str:
        if self.localization is None:
            return THROTTLE_NOTICE
        language_code = getattr(event.from_user, "language_code", None) or ""
        return self.localization.resolve(language_code.split("-")[0]).throttle_notice

    async def _notify_limit(self, event: TelegramObject) -> None:
        if isinstance(event, Message):
            await event.answer(self._notice(event), parse_mode=None)
        elif isinstance(event, CallbackQuery):
            await event.answer(self._notice(event), show_alert=False)


__all__ = ["ThrottleMiddleware", "THROTTLE_NOTICE"]
