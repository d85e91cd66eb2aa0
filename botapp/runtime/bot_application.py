"""Telegram bot runtime application wiring."""

from __future__ import annotations

import logging
from typing import Optional

from telegram import Update
from telegram.ext import Application, ContextTypes

from botapp.bootstrap import DependencyContainer
from botapp.commands.handlers import register_core_handlers
from botapp.commands.parser import parse_command
from botapp.config import BotAppConfig, load_bot_config
from botapp.error_handler import ErrorHandler
from botapp.runtime.lifecycle import LifecycleManager
from botapp.ui.text_blocks import split_message
from infrastructure.constants import ROBOT_NAME


class BotApplication:
    """Assemble dependencies and handlers for the Telegram bot runtime."""

    def __init__(
        self,
        config: Optional[BotAppConfig] = None,
        *,
        container: Optional[DependencyContainer] = None,
    ) -> None:
        self.logger = logging.getLogger('RoboRooney')
        self.config = config or load_bot_config()
        self.token = self.config.telegram.token
        self.container = container or DependencyContainer(self.config)
        dependencies = self.container.build_dependencies()

        self.tracker = dependencies.tracker
        self.ticker = dependencies.ticker
        self.commands = dependencies.commands
        self.lifecycle = LifecycleManager(dependencies, logger=self.logger)
        self.application = None

    def _bot_username(self, context: ContextTypes.DEFAULT_TYPE) -> str:
        bot = getattr(context, 'bot', None)
        return getattr(bot, 'username', None) or ROBOT_NAME

    async def command(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Handle ``/list``, ``/checkout <id>`` and the other slash commands."""

        await self._answer(update, context)

    async def mention(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Handle free text such as ``@roborooney unseen``."""

        message = update.effective_message
        username = self._bot_username(context)
        if not message or f"@{username}".lower() not in (message.text or "").lower():
            return
        await self._answer(update, context)

    async def error_handler(self, update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Central error handler for Telegram exceptions."""

        await ErrorHandler.handle_telegram_error(update, context, context.error)

    def run(self) -> None:
        """Run the Telegram bot with long polling."""

        app = Application.builder().token(self.token).build()
        register_core_handlers(app, self)

        app.post_init = self._post_init
        app.post_stop = self._post_stop

        self.application = app
        self.logger.info("Starting async bot...")
        app.run_polling()

    async def _answer(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        message = update.effective_message
        if message is None:
            return

        username = self._bot_username(context)
        parsed = parse_command(message.text, username)
        user = update.effective_user
        self.logger.info(
            "Command %s from user %s",
            parsed.name,
            user.id if user else "unknown",
        )
        reply = await self.commands.dispatch(parsed, bot_username=username)
        for chunk in split_message(reply):
            await message.reply_text(chunk)

    async def _post_init(self, application) -> None:
        await self.lifecycle.post_init(application)
        self.application = application

    async def _post_stop(self, application) -> None:
        await self.lifecycle.post_stop(application)
        self.application = None


__all__ = ['BotApplication']
