"""Map free-text chat messages onto bot commands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from infrastructure.constants import ROBOT_NAME

COMMAND_HELP = "help"
COMMAND_REFRESH = "refresh"
COMMAND_LIST = "list"
COMMAND_UNSEEN = "unseen"
COMMAND_RULES = "rules"
COMMAND_PITCHES = "pitches"
COMMAND_CHECKOUT = "checkout"

COMMANDS = (
    COMMAND_HELP,
    COMMAND_REFRESH,
    COMMAND_LIST,
    COMMAND_UNSEEN,
    COMMAND_RULES,
    COMMAND_PITCHES,
    COMMAND_CHECKOUT,
)

_ALIASES = {
    "start": COMMAND_HELP,
}


@dataclass(frozen=True)
class ParsedCommand:
    name: str
    argument: Optional[str] = None


def parse_command(text: Optional[str], bot_username: str = ROBOT_NAME) -> ParsedCommand:
    """Parse ``@bot list``, ``/checkout 123-456`` and similar messages.

    Mentions of the bot are ignored wherever they appear; unknown or empty
    input maps to ``help``.
    """

    mention = f"@{bot_username}".lower()
    tokens = []
    for token in (text or "").split():
        lowered = token.lower()
        if lowered == mention:
            continue
        # "/list@roborooney" as sent from Telegram group chats
        if lowered.endswith(mention):
            token = token[: -len(mention)]
        tokens.append(token)

    if not tokens:
        return ParsedCommand(COMMAND_HELP)

    name = tokens[0].lstrip("/").lower()
    name = _ALIASES.get(name, name)
    if name not in COMMANDS:
        return ParsedCommand(COMMAND_HELP)

    argument = tokens[1] if len(tokens) > 1 else None
    return ParsedCommand(name, argument)


__all__ = [
    'COMMANDS',
    'COMMAND_CHECKOUT',
    'COMMAND_HELP',
    'COMMAND_LIST',
    'COMMAND_PITCHES',
    'COMMAND_REFRESH',
    'COMMAND_RULES',
    'COMMAND_UNSEEN',
    'ParsedCommand',
    'parse_command',
]
