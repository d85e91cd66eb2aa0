"""Utilities to register Telegram command and message handlers."""

from __future__ import annotations

from telegram.ext import Application, CommandHandler, MessageHandler, filters

from botapp.commands.parser import COMMANDS


def register_core_handlers(application: Application, bot) -> None:
    """Wire up the bot's commands, mention handler, and error handler."""

    application.add_handler(CommandHandler("start", bot.command))
    for name in COMMANDS:
        application.add_handler(CommandHandler(name, bot.command))
    application.add_handler(
        MessageHandler(filters.TEXT & filters.Entity("mention") & ~filters.COMMAND, bot.mention)
    )
    application.add_error_handler(bot.error_handler)


__all__ = ['register_core_handlers']
