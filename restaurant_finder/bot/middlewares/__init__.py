from restaurant_finder.bot.middlewares.throttle import ThrottleMiddleware

__all__ = ["ThrottleMiddleware"]
