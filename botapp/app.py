#!/usr/bin/env python3
"""
RoboRooney - entrypoint wrapping the runtime application.
"""

import logging
import sys
from pathlib import Path

if __name__ == "__main__" and __package__ is None:
    sys.path.append(str(Path(__file__).resolve().parents[1]))
    __package__ = "botapp"

from botapp.config import load_bot_config
from botapp.runtime import BotApplication
from infrastructure.logging_config import setup_logging
from infrastructure.settings import ConfigurationError, load_settings


def main() -> None:
    """Entry point used by both the console script and module execution."""

    try:
        settings = load_settings()
    except ConfigurationError as exc:
        logging.basicConfig(level=logging.ERROR)
        logging.getLogger('Main').critical("❌ Invalid configuration: %s", exc)
        sys.exit(1)

    setup_logging(production_mode=settings.production_mode, log_dir=settings.log_directory)
    logger = logging.getLogger('Main')
    logger.info("=" * 50)
    logger.info("RoboRooney - pitch availability bot")
    logger.info("=" * 50)

    bot = BotApplication(load_bot_config(settings))

    try:
        logger.info("🚀 Starting bot...")
        bot.run()
    except KeyboardInterrupt:
        logger.info("✅ Stopped by user (Ctrl+C)")
    except Exception as exc:
        logger.error("❌ Error: %s", exc, exc_info=True)
        raise
    finally:
        logger.info("RoboRooney is shutting down.")


if __name__ == '__main__':
    main()
