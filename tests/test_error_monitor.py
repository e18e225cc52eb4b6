from __future__ import annotations

from datetime import datetime, timezone
from types import SimpleNamespace

import pytest
from aiogram.dispatcher.event.bases import UNHANDLED
from aiogram.types import Chat, ErrorEvent, Message, Update, User

from restaurant_finder.services.error_monitor import TELEGRAM_MESSAGE_LIMIT, ErrorMonitor
from tests.fakes import DummyBot


def _make_update() -> Update:
    chat = Chat(id=999, type="private")
    user = User(id=123, is_bot=False, first_name="Test")
    message = Message(
        message_id=1,
        date=datetime.now(timezone.utc),
        chat=chat,
        from_user=user,
        text="/find",
    )
    return Update(update_id=77, message=message)


@pytest.mark.asyncio
async def test_error_monitor_skips_without_admin():
    monitor = ErrorMonitor(SimpleNamespace(admin_telegram_id=None, environment="test"))
    bot = DummyBot()
    event = ErrorEvent(update=_make_update(), exception=RuntimeError("boom"))

    result = await monitor.handle_error(event, bot)

    assert result is UNHANDLED
    assert bot.sent_messages == []


@pytest.mark.asyncio
async def test_error_monitor_sends_notification():
    monitor = ErrorMonitor(SimpleNamespace(admin_telegram_id=555, environment="prod"))
    bot = DummyBot()
    event = ErrorEvent(update=_make_update(), exception=ValueError("bad input" * 1000))

    result = await monitor.handle_error(event, bot)

    assert result is UNHANDLED
    assert len(bot.sent_messages) == 1
    payload = bot.sent_messages[0]
    assert payload["chat_id"] == 555
    assert payload["parse_mode"] is None
    assert "ValueError" in payload["text"]
    assert "Chat: 999" in payload["text"]
    assert len(payload["text"]) <= TELEGRAM_MESSAGE_LIMIT


@pytest.mark.asyncio
async def test_error_monitor_survives_notification_failure():
    class FailingBot:
        async def send_message(self, **kwargs):
            raise RuntimeError("telegram down")

    monitor = ErrorMonitor(SimpleNamespace(admin_telegram_id=555, environment="prod"))
    event = ErrorEvent(update=_make_update(), exception=KeyError("x"))

    assert await monitor.handle_error(event, FailingBot()) is UNHANDLED
