"""Telegram reply and inline keyboards."""

from __future__ import annotations

from typing import Iterable

from aiogram.types import (
    InlineKeyboardButton,
    InlineKeyboardMarkup,
    KeyboardButton,
    ReplyKeyboardMarkup,
)

from restaurant_finder.domain.models import Language, UIText

LANGUAGE_CALLBACK_PREFIX = "lang:"


def main_keyboard(texts: UIText) -> ReplyKeyboardMarkup:
    return ReplyKeyboardMarkup(
        keyboard=[[KeyboardButton(text=texts.find_button)]],
        resize_keyboard=True,
        input_field_placeholder=texts.manual_location_placeholder,
    )


def loading_keyboard(texts: UIText) -> ReplyKeyboardMarkup:
    return ReplyKeyboardMarkup(
        keyboard=[[KeyboardButton(text=texts.loading_button)]],
        resize_keyboard=True,
    )


def location_keyboard(texts: UIText) -> ReplyKeyboardMarkup:
    """Keyboard asking for a one-shot location share."""
    return ReplyKeyboardMarkup(
        keyboard=[
            [KeyboardButton(text=texts.share_location_button, request_location=True)],
            [KeyboardButton(text=texts.decline_location_button)],
        ],
        resize_keyboard=True,
        one_time_keyboard=True,
    )


def language_keyboard(languages: Iterable[Language], current: str) -> InlineKeyboardMarkup:
    buttons = []
    for language in languages:
        label = f"✓ {language.name}" if language.code == current else language.name
        buttons.append(
            [
                InlineKeyboardButton(
                    text=label,
                    callback_data=f"{LANGUAGE_CALLBACK_PREFIX}{language.code}",
                )
            ]
        )
    return InlineKeyboardMarkup(inline_keyboard=buttons)


__all__ = [
    "LANGUAGE_CALLBACK_PREFIX",
    "language_keyboard",
    "loading_keyboard",
    "location_keyboard",
    "main_keyboard",
]
