"""Turn session snapshots into chat messages."""

from __future__ import annotations

from typing import Sequence

from restaurant_finder.domain.models import (
    Phase,
    Restaurant,
    SearchSession,
    TextDirection,
    UIText,
)

RTL_MARK = "\u200f"
MESSAGE_CHAR_LIMIT = 4096


def apply_direction(text: str, direction: TextDirection) -> str:
    if direction is not TextDirection.RTL:
        return text
    return "\n".join(f"{RTL_MARK}{line}" if line else line for line in text.split("\n"))


def message_length(text: str) -> int:
    """Length as Telegram counts it, in UTF-16 code units."""
    return len(text.encode("utf-16-le")) // 2


def _truncate(text: str, limit: int) -> str:
    if message_length(text) <= limit:
        return text
    cut = text[: limit - 1]
    while message_length(cut) > limit - 1:
        cut = cut[:-1]
    return f"{cut}…"


def format_restaurants(
    restaurants: Sequence[Restaurant],
    direction: TextDirection = TextDirection.LTR,
    limit: int = MESSAGE_CHAR_LIMIT,
) -> list[str]:
    """Number the restaurants and pack them into as few messages as fit ``limit``.

    Messages are only split between entries; a single entry longer than the
    limit is truncated.
    """

    chunks: list[str] = []
    current = ""
    for index, restaurant in enumerate(restaurants, start=1):
        entry = apply_direction(
            f"{index}. {restaurant.name} ({restaurant.cuisine})\n{restaurant.description}",
            direction,
        )
        entry = _truncate(entry, limit)
        candidate = f"{current}\n\n{entry}" if current else entry
        if current and message_length(candidate) > limit:
            chunks.append(current)
            current = entry
        else:
            current = candidate
    if current:
        chunks.append(current)
    return chunks


def welcome_text(texts: UIText) -> str:
    return f"{texts.title}\n{texts.subtitle}\n\n{texts.welcome_message}"


def build_view(
    session: SearchSession,
    texts: UIText,
    direction: TextDirection = TextDirection.LTR,
) -> list[str]:
    """Render a snapshot in display order: error, manual prompt, loader, welcome, results."""

    blocks: list[str] = []
    results: list[str] = []
    if session.error_message is not None:
        blocks.append(session.error_message.text(texts))
    if session.show_manual_entry and not session.loading:
        blocks.append(f"{texts.manual_location_prompt}\n{texts.manual_location_placeholder}")
    if session.loading:
        blocks.append(texts.loader_message)
    if session.phase is Phase.IDLE and not blocks:
        blocks.append(welcome_text(texts))
    if session.restaurants:
        results = format_restaurants(session.restaurants, direction)
    elif session.phase is Phase.RESULTS:
        blocks.append(texts.no_results_message)
    return [apply_direction(block, direction) for block in blocks] + results


__all__ = [
    "MESSAGE_CHAR_LIMIT",
    "RTL_MARK",
    "apply_direction",
    "build_view",
    "format_restaurants",
    "message_length",
    "welcome_text",
]
