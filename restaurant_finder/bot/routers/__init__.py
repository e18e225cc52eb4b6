from aiogram import Router

from restaurant_finder.bot.routers import finder


def setup_routers() -> Router:
    router = Router()
    router.include_router(finder.router)
    return router


__all__ = ["setup_routers"]
