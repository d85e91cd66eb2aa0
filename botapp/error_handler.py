"""
Centralized error handling for the Telegram command surface
"""

import logging

from telegram import Update
from telegram.ext import ContextTypes


GENERIC_ERROR_MESSAGE = (
    "❌ Something went wrong while answering that. "
    "It has been logged; please try again later."
)


class ErrorHandler:
    """
    Centralized error handling for the bot

    Logs the failure with its traceback and, when the update came from a
    chat message, tells the user something went wrong.
    """

    @staticmethod
    async def handle_telegram_error(update: object, context: ContextTypes.DEFAULT_TYPE, error: Exception) -> None:
        """
        Main entry point for errors raised while processing Telegram updates

        Args:
            update: The telegram update that caused the error (may be None)
            context: The callback context
            error: The exception that occurred
        """
        logger = logging.getLogger('ErrorHandler')

        error_message_str = str(error).lower()
        if "message is not modified" in error_message_str:
            logger.warning("Telegram message not modified: %s", error)
            return

        logger.error(
            "Telegram error occurred: %s: %s",
            type(error).__name__,
            error,
            exc_info=error,
        )

        if not isinstance(update, Update):
            logger.warning("No update object available - cannot send error message to user")
            return

        if update.effective_user:
            logger.error("Error context - User ID: %s", update.effective_user.id)

        message = update.effective_message
        if message is None:
            logger.warning("Unable to send error message - no message available")
            return

        try:
            await message.reply_text(GENERIC_ERROR_MESSAGE)
        except Exception as send_error:
            logger.error("Failed to send error message to user: %s", send_error, exc_info=True)
