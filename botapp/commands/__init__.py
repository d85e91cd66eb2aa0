"""Command parsing, command answers, and Telegram handler registration."""

from .parser import COMMANDS, ParsedCommand, parse_command
from .service import CheckoutLookup, CommandService

__all__ = [
    'COMMANDS',
    'CheckoutLookup',
    'CommandService',
    'ParsedCommand',
    'parse_command',
]
