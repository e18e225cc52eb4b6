"""Log unhandled bot errors and notify the administrator."""

from __future__ import annotations

import traceback

from aiogram import Bot
from aiogram.dispatcher.event.bases import UNHANDLED
from aiogram.types import ErrorEvent, Update

from restaurant_finder.bot.utils.telegram import bot_send_with_retry
from restaurant_finder.config import FinderSettings
from restaurant_finder.logging import logger

# Telegram messages are limited to 4096 characters.
TELEGRAM_MESSAGE_LIMIT = 3900
TRACEBACK_CHAR_LIMIT = 1800


class ErrorMonitor:
    """Error handler registered on the aiogram dispatcher."""

    def __init__(self, settings: FinderSettings) -> None:
        self._settings = settings

    async def handle_error(self, event: ErrorEvent, bot: Bot):
        update_id = getattr(event.update, "update_id", None)
        logger.error(
            "bot_error_captured",
            exception_type=event.exception.__class__.__name__,
            exception=str(event.exception),
            update_id=update_id,
            chat_id=self._chat_id(event.update),
        )

        admin_id = self._settings.admin_telegram_id
        if admin_id is None:
            return UNHANDLED

        try:
            await bot_send_with_retry(
                bot, chat_id=admin_id, text=self._build_message(event), parse_mode=None
            )
        except Exception:
            logger.exception("error_monitor_notification_failed", update_id=update_id)
        return UNHANDLED

    def _build_message(self, event: ErrorEvent) -> str:
        exception = event.exception
        lines = [
            "RESTAURANT FINDER ERROR",
            f"Environment: {self._settings.environment}",
            f"Exception: {exception.__class__.__name__}: {exception}",
            f"Update ID: {getattr(event.update, 'update_id', 'unknown')}",
            f"Chat: {self._chat_id(event.update) or 'unknown'}",
        ]
        trace = self._format_traceback(exception)
        if trace:
            lines.extend(["", "Traceback:", trace])
        text = "\n".join(lines).strip()
        return _truncate(text, TELEGRAM_MESSAGE_LIMIT)

    @staticmethod
    def _chat_id(update: Update | None) -> int | None:
        if update is None:
            return None
        source = update.message or update.callback_query
        if source is None:
            return None
        chat = getattr(source, "chat", None)
        if chat is None and getattr(source, "message", None) is not None:
            chat = source.message.chat
        return getattr(chat, "id", None)

    @staticmethod
    def _format_traceback(exception: BaseException) -> str:
        trace = "".join(
            traceback.format_exception(type(exception), exception, exception.__traceback__)
        ).strip()
        return _truncate(trace, TRACEBACK_CHAR_LIMIT) if trace else ""


def _truncate(value: str, limit: int) -> str:
    value = value.strip()
    if len(value) <= limit:
        return value
    return f"{value[: limit - 15].rstrip()}\n...[truncated]"


__all__ = ["ErrorMonitor"]
