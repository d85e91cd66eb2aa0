"""Telegram application layer with lazy exports to avoid heavy imports."""

__all__ = ["BotApplication", "main"]


def __getattr__(name):
    if name == "BotApplication":
        from .runtime.bot_application import BotApplication as _BotApplication

        return _BotApplication
    if name == "main":
        from .app import main as _main

        return _main
    raise AttributeError(f"module 'botapp' has no attribute {name!r}")
