"""Telegram handlers for restaurant discovery."""

from __future__ import annotations

from aiogram import Bot, F, Router
from aiogram.filters import Command, CommandObject, CommandStart
from aiogram.types import CallbackQuery, Message

from restaurant_finder.bot.keyboards import (
    LANGUAGE_CALLBACK_PREFIX,
    language_keyboard,
    main_keyboard,
)
from restaurant_finder.bot.rendering import apply_direction, welcome_text
from restaurant_finder.bot.sessions import ChatSessionRegistry
from restaurant_finder.bot.utils.telegram import answer_with_retry, bot_send_with_retry
from restaurant_finder.logging import logger
from restaurant_finder.services.exceptions import LocationFailure
from restaurant_finder.services.orchestrator import SearchOrchestrator

router = Router()


def _orchestrator(message: Message, bot: Bot, registry: ChatSessionRegistry) -> SearchOrchestrator:
    language_hint = message.from_user.language_code if message.from_user else None
    return registry.get(bot, message.chat, language_hint=language_hint)


async def _send_welcome(message: Message, orchestrator: SearchOrchestrator) -> None:
    texts = orchestrator.texts
    await answer_with_retry(
        message,
        apply_direction(welcome_text(texts), orchestrator.direction),
        reply_markup=main_keyboard(texts),
        parse_mode=None,
    )


@router.message(CommandStart())
async def handle_start(message: Message, bot: Bot, registry: ChatSessionRegistry) -> None:
    await _send_welcome(message, _orchestrator(message, bot, registry))


@router.message(Command("language"))
async def handle_language(message: Message, bot: Bot, registry: ChatSessionRegistry) -> None:
    orchestrator = _orchestrator(message, bot, registry)
    await answer_with_retry(
        message,
        apply_direction(orchestrator.texts.language_prompt, orchestrator.direction),
        reply_markup=language_keyboard(
            registry.localization.languages, orchestrator.language.code
        ),
        parse_mode=None,
    )


@router.callback_query(F.data.startswith(LANGUAGE_CALLBACK_PREFIX))
async def handle_language_choice(
    callback: CallbackQuery, bot: Bot, registry: ChatSessionRegistry
) -> None:
    code = callback.data.removeprefix(LANGUAGE_CALLBACK_PREFIX)
    await callback.answer()
    if callback.message is None:
        return
    chat = callback.message.chat
    orchestrator = registry.get(bot, chat)
    texts = orchestrator.set_language(code)
    await bot_send_with_retry(
        bot,
        chat_id=chat.id,
        text=apply_direction(texts.language_changed, orchestrator.direction),
        reply_markup=main_keyboard(texts),
        parse_mode=None,
    )


@router.message(Command("find"))
async def handle_find(message: Message, bot: Bot, registry: ChatSessionRegistry) -> None:
    await _orchestrator(message, bot, registry).run_automatic_search()


@router.message(Command("where"))
async def handle_where(
    message: Message,
    command: CommandObject,
    bot: Bot,
    registry: ChatSessionRegistry,
) -> None:
    await _orchestrator(message, bot, registry).run_manual_search(command.args or "")


@router.message(F.location)
async def handle_location(message: Message, bot: Bot, registry: ChatSessionRegistry) -> None:
    orchestrator = _orchestrator(message, bot, registry)
    provider = registry.location_provider(message.chat.id)
    location = message.location
    if provider is None or not provider.pending:
        logger.info("unsolicited_location_ignored", chat_id=message.chat.id)
        await _send_welcome(message, orchestrator)
        return
    if location.live_period:
        provider.reject(LocationFailure.POSITION_UNAVAILABLE, "live locations are not supported")
        return
    provider.resolve(location.latitude, location.longitude)


@router.message(F.text)
async def handle_text(message: Message, bot: Bot, registry: ChatSessionRegistry) -> None:
    orchestrator = _orchestrator(message, bot, registry)
    texts = orchestrator.texts
    text = message.text

    if text == texts.find_button:
        await orchestrator.run_automatic_search()
        return

    if text == texts.loading_button:
        await answer_with_retry(
            message,
            apply_direction(texts.loader_message, orchestrator.direction),
            parse_mode=None,
        )
        return

    provider = registry.location_provider(message.chat.id)
    if provider is not None and provider.pending:
        if text == texts.decline_location_button:
            provider.reject(LocationFailure.PERMISSION_DENIED, "user declined to share location")
        else:
            await answer_with_retry(
                message,
                apply_direction(texts.share_location_prompt, orchestrator.direction),
                parse_mode=None,
            )
        return

    if orchestrator.session.show_manual_entry:
        await orchestrator.run_manual_search(text)
        return

    await _send_welcome(message, orchestrator)


__all__ = [
    "handle_find",
    "handle_language",
    "handle_language_choice",
    "handle_location",
    "handle_start",
    "handle_text",
    "handle_where",
    "router",
]
