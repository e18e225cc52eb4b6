"""Async retry helper used for Telegram sends."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, TypeVar

T = TypeVar("T")
AsyncFactory = Callable[[], Awaitable[T]]


async def retry_async(
    operation: AsyncFactory[T],
    *,
    max_attempts: int = 3,
    base_delay: float = 0.5,
    retry_on: tuple[type[BaseException], ...] = (Exception,),
    logger=None,
    operation_name: str = "operation",
) -> T:
    """Retry an async operation with linear backoff.

    Only exceptions listed in ``retry_on`` are retried; anything else and the
    final failed attempt propagate unchanged.
    """

    for attempt in range(1, max_attempts + 1):
        try:
            return await operation()
        except retry_on as exc:
            if attempt >= max_attempts:
                raise
            delay = base_delay * attempt
            if logger is not None:
                logger.warning(
                    "retrying_operation",
                    operation=operation_name,
                    attempt=attempt,
                    max_attempts=max_attempts,
                    delay=delay,
                    error=str(exc),
                )
            await asyncio.sleep(delay)

    raise ValueError(f"max_attempts must be positive, got {max_attempts}")


__all__ = ["retry_async"]
