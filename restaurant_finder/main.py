"""Application entrypoint."""

from __future__ import annotations

import asyncio

from aiogram import Bot, Dispatcher
from aiogram.client.session.aiohttp import AiohttpSession

from restaurant_finder.bot.middlewares import ThrottleMiddleware
from restaurant_finder.bot.routers import setup_routers
from restaurant_finder.bot.sessions import ChatSessionRegistry
from restaurant_finder.config import get_settings
from restaurant_finder.i18n import LocalizationTable
from restaurant_finder.logging import configure_logging, logger
from restaurant_finder.services.error_monitor import ErrorMonitor
from restaurant_finder.services.search import RestaurantSearchService


async def main() -> None:
    configure_logging()
    settings = get_settings()

    session = (
        AiohttpSession(proxy=settings.telegram_proxy) if settings.telegram_proxy else None
    )
    bot = Bot(token=settings.telegram_token.get_secret_value(), session=session)
    dp = Dispatcher()
    dp.include_router(setup_routers())
    error_monitor = ErrorMonitor(settings=settings)
    dp.errors.register(error_monitor.handle_error)

    localization = LocalizationTable(default_locale=settings.default_language)
    throttle_middleware = ThrottleMiddleware(settings.request_limit, localization)
    dp.message.middleware(throttle_middleware)
    dp.callback_query.middleware(throttle_middleware)

    search_service = RestaurantSearchService.build(settings, localization)
    registry = ChatSessionRegistry(
        search_provider=search_service,
        localization=localization,
        location_timeout_seconds=settings.location_timeout_seconds,
        max_sessions=settings.max_chat_sessions,
    )

    logger.info(
        "bot_starting",
        environment=settings.environment,
        llm_provider=settings.llm.provider,
        model=settings.llm.model,
    )
    await dp.start_polling(bot, registry=registry)


if __name__ == "__main__":
    asyncio.run(main())
