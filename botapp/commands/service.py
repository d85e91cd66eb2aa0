"""On-demand queries answered from the tracker and the static configuration."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from infrastructure.constants import HELP_TEXT, ROBOT_NAME
from monitoring.identity import split_pitch_slot_key
from monitoring.notification_ticker import NotificationTicker
from monitoring.tracker import PitchSlotTracker, TrackedPitchSlot
from pitches.models import Pitch, Rule, Slot

from botapp.commands import parser
from botapp.ui import slots as slot_text

CheckoutLinkBuilder = Callable[[Pitch, Slot], str]


@dataclass(frozen=True)
class CheckoutLookup:
    """Result of looking up a pitch-slot key for checkout."""

    key: str
    item: Optional[TrackedPitchSlot] = None
    link: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.item is not None


class CommandService:
    """Answer chat commands. Reads never change seen flags."""

    def __init__(
        self,
        tracker: PitchSlotTracker,
        ticker: NotificationTicker,
        pitches: Sequence[Pitch],
        rules: Sequence[Rule],
        checkout_link: CheckoutLinkBuilder,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.tracker = tracker
        self.ticker = ticker
        self.pitches = list(pitches)
        self.rules = list(rules)
        self.checkout_link = checkout_link
        self.logger = logger or logging.getLogger('RoboRooney')

    def help(self, bot_username: str = ROBOT_NAME) -> str:
        return HELP_TEXT.format(username=bot_username)

    def list_all(self) -> str:
        return slot_text.format_pitch_slots(self.tracker.all_items())

    def list_unseen(self) -> str:
        return slot_text.format_pitch_slots(
            self.tracker.unseen(),
            empty_text=slot_text.NO_NEW_RESULTS,
        )

    def list_rules(self) -> str:
        return slot_text.format_rules(self.rules)

    def list_pitches(self) -> str:
        return slot_text.format_pitches(self.pitches)

    def checkout(self, key: str) -> CheckoutLookup:
        item = self.tracker.get(key)
        if item is None:
            return CheckoutLookup(key=key)
        return CheckoutLookup(key=key, item=item, link=self.checkout_link(item.pitch, item.slot))

    def describe_checkout(self, key: Optional[str]) -> str:
        if not key:
            return "Usage: checkout {pitch-slot ID}"

        try:
            split_pitch_slot_key(key)
        except ValueError:
            return f"{key} is not a pitch-slot ID. IDs look like 12345-678901."

        lookup = self.checkout(key)
        if not lookup.found:
            self.logger.info("Checkout requested for unknown pitch slot %s", key)
            return f"Pitch slot {key} was not found. Use list to see the current IDs."
        return f"{slot_text.format_pitch_slot(lookup.item)}\nCheckout: {lookup.link}"

    async def refresh(self) -> str:
        result = await self.ticker.refresh()
        return slot_text.format_refresh_result(result)

    async def dispatch(
        self,
        command: parser.ParsedCommand,
        *,
        bot_username: str = ROBOT_NAME,
    ) -> str:
        """Return the reply text for ``command``.

        ``bot_username`` is the name users mention, as shown in the help text.
        """

        self.logger.debug("Dispatching command %s (argument=%s)", command.name, command.argument)
        if command.name == parser.COMMAND_LIST:
            return self.list_all()
        if command.name == parser.COMMAND_UNSEEN:
            return self.list_unseen()
        if command.name == parser.COMMAND_RULES:
            return self.list_rules()
        if command.name == parser.COMMAND_PITCHES:
            return self.list_pitches()
        if command.name == parser.COMMAND_CHECKOUT:
            return self.describe_checkout(command.argument)
        if command.name == parser.COMMAND_REFRESH:
            return await self.refresh()
        return self.help(bot_username)


__all__ = ['CheckoutLookup', 'CommandService']
