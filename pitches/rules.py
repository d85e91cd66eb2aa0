"""Rule builders for filtering pitch slots.

Each builder returns a :class:`~pitches.models.Rule` whose description is
what the ``rules`` command shows to users.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Iterable, List, Sequence

from infrastructure import constants
from pitches.models import Rule, Slot

_DAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
WEEKDAYS = (0, 1, 2, 3, 4)
WEEKEND = (5, 6)


def _minutes_of_day(slot: Slot) -> int:
    return slot.starts.hour * 60 + slot.starts.minute


def starts_between(start_hour: int, end_hour: int) -> Rule:
    """Slots starting in ``[start_hour, end_hour)`` local time."""

    if not 0 <= start_hour < end_hour <= 24:
        raise ValueError(f"Invalid hour range {start_hour}-{end_hour}")

    def predicate(slot: Slot) -> bool:
        return start_hour * 60 <= _minutes_of_day(slot) < end_hour * 60

    return Rule(f"Starts between {start_hour:02d}:00 and {end_hour:02d}:00", predicate)


def on_days(days: Sequence[int]) -> Rule:
    """Slots on the given weekdays (Monday is 0)."""

    allowed = frozenset(days)
    if not allowed or not allowed <= set(range(7)):
        raise ValueError(f"Invalid weekdays {days!r}")
    label = ", ".join(_DAY_NAMES[day] for day in sorted(allowed))
    return Rule(f"On {label}", lambda slot: slot.starts.weekday() in allowed)


def min_duration(minutes: int) -> Rule:
    threshold = timedelta(minutes=minutes)
    return Rule(f"At least {minutes} minutes long", lambda slot: slot.duration >= threshold)


def max_price(amount: float, currency: str = "GBP") -> Rule:
    return Rule(
        f"Costs at most {amount:.2f} {currency}",
        lambda slot: slot.currency == currency and slot.price <= amount,
    )


def has_availability() -> Rule:
    return Rule("Has at least one pitch free", lambda slot: slot.availabilities > 0)


def weekday_evening(
    start_hour: int = constants.WEEKDAY_EVENING_START_HOUR,
    end_hour: int = constants.WEEKDAY_EVENING_END_HOUR,
) -> Rule:
    """Weekday slots starting in the evening window."""

    in_window = starts_between(start_hour, end_hour)
    return Rule(
        f"Weekdays starting between {start_hour:02d}:00 and {end_hour:02d}:00",
        lambda slot: slot.starts.weekday() in WEEKDAYS and in_window.applies(slot),
    )


def weekend_daytime(
    start_hour: int = constants.WEEKEND_DAY_START_HOUR,
    end_hour: int = constants.WEEKEND_DAY_END_HOUR,
) -> Rule:
    in_window = starts_between(start_hour, end_hour)
    return Rule(
        f"Weekends starting between {start_hour:02d}:00 and {end_hour:02d}:00",
        lambda slot: slot.starts.weekday() in WEEKEND and in_window.applies(slot),
    )


def any_of(description: str, rules: Iterable[Rule]) -> Rule:
    """Combine rules so a slot passes when at least one of them does."""

    members = list(rules)
    if not members:
        raise ValueError("any_of needs at least one rule")
    return Rule(description, lambda slot: any(rule.applies(slot) for rule in members))


def filter_slots_by_rules(slots: Iterable[Slot], rules: Iterable[Rule]) -> List[Slot]:
    """Return the slots passing every rule, preserving input order."""

    active = list(rules)
    return [slot for slot in slots if all(rule.applies(slot) for rule in active)]


def default_rules() -> List[Rule]:
    return [
        has_availability(),
        any_of(
            "Weekday evenings or weekend daytime",
            [weekday_evening(), weekend_daytime()],
        ),
        min_duration(constants.DEFAULT_MIN_DURATION_MINUTES),
    ]


__all__ = [
    "WEEKDAYS",
    "WEEKEND",
    "any_of",
    "default_rules",
    "filter_slots_by_rules",
    "has_availability",
    "max_price",
    "min_duration",
    "on_days",
    "starts_between",
    "weekday_evening",
    "weekend_daytime",
]
