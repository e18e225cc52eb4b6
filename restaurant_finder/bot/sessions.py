"""Per-chat orchestrators and the listener that renders them into Telegram messages."""

from __future__ import annotations

from collections import OrderedDict

from aiogram import Bot
from aiogram.enums import ChatType
from aiogram.types import Chat

from restaurant_finder.bot.keyboards import loading_keyboard, location_keyboard, main_keyboard
from restaurant_finder.bot.rendering import apply_direction, build_view
from restaurant_finder.bot.utils.telegram import bot_send_with_retry
from restaurant_finder.domain.models import SearchSession, TextDirection, UIText
from restaurant_finder.i18n import LocalizationTable
from restaurant_finder.logging import logger
from restaurant_finder.services.location import CallbackLocationProvider
from restaurant_finder.services.orchestrator import SearchOrchestrator, SearchProvider


class ChatRenderer:
    """Session listener that sends the rendered snapshot to one chat."""

    def __init__(self, bot: Bot, chat_id: int) -> None:
        self._bot = bot
        self._chat_id = chat_id

    async def __call__(
        self, session: SearchSession, texts: UIText, direction: TextDirection
    ) -> None:
        blocks = build_view(session, texts, direction)
        markup = loading_keyboard(texts) if session.loading else main_keyboard(texts)
        for index, block in enumerate(blocks):
            is_last = index == len(blocks) - 1
            await bot_send_with_retry(
                self._bot,
                chat_id=self._chat_id,
                text=block,
                reply_markup=markup if is_last else None,
                parse_mode=None,
            )


class ChatSessionRegistry:
    """In-memory map of chat id to its orchestrator; nothing is persisted.

    At most ``max_sessions`` chats are kept. The least recently used chat is
    forgotten first, except chats still waiting for a shared location.
    """

    def __init__(
        self,
        *,
        search_provider: SearchProvider,
        localization: LocalizationTable,
        location_timeout_seconds: float = 60.0,
        max_sessions: int = 10_000,
    ) -> None:
        self._search = search_provider
        self._localization = localization
        self._timeout = location_timeout_seconds
        self.max_sessions = max_sessions
        self._sessions: OrderedDict[int, SearchOrchestrator] = OrderedDict()
        self._locations: dict[int, CallbackLocationProvider] = {}

    @property
    def localization(self) -> LocalizationTable:
        return self._localization

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, chat_id: int) -> bool:
        return chat_id in self._sessions

    def get(self, bot: Bot, chat: Chat, *, language_hint: str | None = None) -> SearchOrchestrator:
        orchestrator = self._sessions.get(chat.id)
        if orchestrator is None:
            orchestrator = self._build(bot, chat, language_hint)
            self._sessions[chat.id] = orchestrator
            self._evict()
        else:
            self._sessions.move_to_end(chat.id)
        return orchestrator

    def location_provider(self, chat_id: int) -> CallbackLocationProvider | None:
        return self._locations.get(chat_id)

    def _evict(self) -> None:
        overflow = len(self._sessions) - self.max_sessions
        if overflow <= 0:
            return
        for chat_id in list(self._sessions)[:-1]:
            if overflow <= 0:
                break
            provider = self._locations.get(chat_id)
            if provider is not None and provider.pending:
                continue
            del self._sessions[chat_id]
            self._locations.pop(chat_id, None)
            overflow -= 1
            logger.debug("chat_session_evicted", chat_id=chat_id)

    def _build(self, bot: Bot, chat: Chat, language_hint: str | None) -> SearchOrchestrator:
        chat_id = chat.id

        async def request_location() -> None:
            texts = orchestrator.texts
            await bot_send_with_retry(
                bot,
                chat_id=chat_id,
                text=apply_direction(texts.share_location_prompt, orchestrator.direction),
                reply_markup=location_keyboard(texts),
                parse_mode=None,
            )

        provider = CallbackLocationProvider(
            request=request_location,
            supported=chat.type == ChatType.PRIVATE,
            timeout_seconds=self._timeout,
        )
        self._locations[chat_id] = provider
        hint = (language_hint or "").split("-")[0]
        language = hint if self._localization.is_supported(hint) else self._localization.default_locale
        orchestrator = SearchOrchestrator(
            search_provider=self._search,
            location_provider=provider,
            localization=self._localization,
            language=language,
            listener=ChatRenderer(bot, chat_id),
        )
        return orchestrator


__all__ = ["ChatRenderer", "ChatSessionRegistry"]
