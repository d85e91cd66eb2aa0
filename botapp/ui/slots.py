"""Text rendering for tracked pitch slots, rules and pitches."""

from __future__ import annotations

from typing import Optional, Sequence

from monitoring.reconciler import ReconcileResult
from monitoring.tracker import TrackedPitchSlot
from pitches.models import Pitch, Rule

from botapp.ui.text_blocks import TextBlockBuilder

NO_NEW_RESULTS = "No new results"
NO_RESULTS = "No slots are currently available"

_CURRENCY_SYMBOLS = {"GBP": "£", "EUR": "€", "USD": "$"}


def format_price(amount: float, currency: str) -> str:
    symbol = _CURRENCY_SYMBOLS.get(currency)
    if symbol:
        return f"{symbol}{amount:.2f}"
    return f"{amount:.2f} {currency}"


def format_pitch_slot(item: TrackedPitchSlot) -> str:
    """One line per slot, ending with the id users pass to ``checkout``."""

    slot = item.slot
    when = f"{slot.starts:%a %d %b %H:%M}-{slot.ends:%H:%M}"
    return (
        f"{item.pitch.name} | {when} | {format_price(slot.price, slot.currency)}"
        f" | ID: {item.key}"
    )


def format_pitch_slots(
    items: Sequence[TrackedPitchSlot],
    *,
    heading: Optional[str] = None,
    empty_text: str = NO_RESULTS,
) -> str:
    if not items:
        return empty_text

    builder = TextBlockBuilder()
    if heading:
        builder.heading(heading).blank()
    builder.bullets(format_pitch_slot(item) for item in items)
    return builder.build()


def format_unseen_batch(items: Sequence[TrackedPitchSlot]) -> str:
    """Notification payload for a ticker firing; never empty."""

    return format_pitch_slots(
        items,
        heading=f"{len(items)} new slot(s) available:",
        empty_text=NO_NEW_RESULTS,
    )


def format_rules(rules: Sequence[Rule]) -> str:
    if not rules:
        return "No rules are in effect; every slot is reported"
    return TextBlockBuilder().heading("Rules in effect:").bullets(
        rule.description for rule in rules
    ).build()


def format_pitches(pitches: Sequence[Pitch]) -> str:
    builder = TextBlockBuilder().heading("Monitored pitches:")
    for pitch in pitches:
        location = f" ({pitch.location})" if pitch.location else ""
        builder.bullet(f"{pitch.name}{location} [{pitch.id}]")
    return builder.build()


def format_refresh_result(result: ReconcileResult) -> str:
    builder = TextBlockBuilder().heading(f"Refreshed: {result.summary()}")
    if result.failed_pitches:
        builder.bullets(f"Pitch {pitch_id}: {error}" for pitch_id, error in sorted(result.failed_pitches.items()))
    return builder.build()


__all__ = [
    'NO_NEW_RESULTS',
    'NO_RESULTS',
    'format_pitch_slot',
    'format_pitch_slots',
    'format_pitches',
    'format_price',
    'format_refresh_result',
    'format_rules',
    'format_unseen_batch',
]
