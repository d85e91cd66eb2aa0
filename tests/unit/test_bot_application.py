from types import SimpleNamespace

import pytest

from botapp.error_handler import ErrorHandler
from botapp.config import load_bot_config
from botapp.runtime.bot_application import BotApplication
from infrastructure.settings import load_settings
from tests.helpers import make_item

ENV = {
    "TELEGRAM_BOT_TOKEN": "123:abc",
    "INCOMING_WEBHOOK_URL": "https://hooks.example.com/services/abc",
    "TICKER_INTERVAL": "1",
}


class FakeMessage:
    def __init__(self, text):
        self.text = text
        self.replies = []

    async def reply_text(self, text, **kwargs):
        self.replies.append(text)


def _update(text):
    message = FakeMessage(text)
    update = SimpleNamespace(
        effective_message=message,
        effective_user=SimpleNamespace(id=42),
    )
    return update, message


def _context(username="roborooney"):
    return SimpleNamespace(bot=SimpleNamespace(username=username), error=None)


def _bot():
    return BotApplication(load_bot_config(load_settings(ENV)))


@pytest.mark.asyncio
async def test_command_replies_with_tracked_slots():
    bot = _bot()
    bot.tracker.upsert(make_item("12345", "678901"))
    update, message = _update("/list")

    await bot.command(update, _context())

    assert len(message.replies) == 1
    assert "12345-678901" in message.replies[0]


@pytest.mark.asyncio
async def test_mention_answers_only_when_bot_is_mentioned():
    bot = _bot()
    bot.tracker.upsert(make_item("1", "2"))

    update, message = _update("@someone_else list")
    await bot.mention(update, _context())
    assert message.replies == []

    update, message = _update("@roborooney unseen")
    await bot.mention(update, _context())
    assert "1-2" in message.replies[0]
    assert bot.tracker.get("1-2").seen is False


@pytest.mark.asyncio
async def test_error_handler_without_update_only_logs():
    await ErrorHandler.handle_telegram_error(None, _context(), RuntimeError("boom"))


@pytest.mark.asyncio
async def test_error_handler_ignores_not_modified():
    update, message = _update("/list")

    await ErrorHandler.handle_telegram_error(update, _context(), RuntimeError("Message is not modified"))

    assert message.replies == []


@pytest.mark.asyncio
async def test_help_names_the_running_bot_username():
    bot = _bot()
    update, message = _update("@pitchfinder_bot help")

    await bot.mention(update, _context(username="pitchfinder_bot"))

    assert "@pitchfinder_bot list" in message.replies[0]
