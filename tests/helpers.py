"""Shared fakes and utilities for unit tests."""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Sequence, Tuple

import pytz

from monitoring.tracker import TrackedPitchSlot
from pitches.models import Pitch, Rule, Slot
from pitches.rules import filter_slots_by_rules

LONDON = pytz.timezone("Europe/London")
# A Monday
BASE_TIME = LONDON.localize(datetime(2025, 3, 3, 12, 0))


class DummyLogger:
    """Lightweight stand-in for ``logging.Logger`` that records calls."""

    def __init__(self) -> None:
        self.records: List[Tuple[str, Tuple[Any, ...], Dict[str, Any]]] = []

    def _record(self, level: str, *args: Any, **kwargs: Any) -> None:
        self.records.append((level, args, kwargs))

    def debug(self, *args: Any, **kwargs: Any) -> None:
        self._record("debug", *args, **kwargs)

    def info(self, *args: Any, **kwargs: Any) -> None:
        self._record("info", *args, **kwargs)

    def warning(self, *args: Any, **kwargs: Any) -> None:
        self._record("warning", *args, **kwargs)

    def error(self, *args: Any, **kwargs: Any) -> None:
        self._record("error", *args, **kwargs)

    def critical(self, *args: Any, **kwargs: Any) -> None:
        self._record("critical", *args, **kwargs)

    def levels(self) -> List[str]:
        return [level for level, _, _ in self.records]


def make_pitch(pitch_id: str = "12345", name: Optional[str] = None) -> Pitch:
    return Pitch(
        id=pitch_id,
        name=name or f"Pitch {pitch_id}",
        venue_id=pitch_id,
        venue_path=f"venue-{pitch_id}",
        city="london",
    )


def make_slot(
    slot_id: str = "100001",
    *,
    hours_from_base: float = 30,
    minutes: int = 60,
    price: float = 60.0,
    availabilities: int = 1,
) -> Slot:
    starts = BASE_TIME + timedelta(hours=hours_from_base)
    return Slot(
        id=slot_id,
        starts=starts,
        ends=starts + timedelta(minutes=minutes),
        price=price,
        availabilities=availabilities,
    )


def make_item(pitch_id: str, slot_id: str, *, seen: bool = False, **slot_kwargs: Any) -> TrackedPitchSlot:
    item = TrackedPitchSlot.from_sample(make_pitch(pitch_id), make_slot(slot_id, **slot_kwargs))
    return TrackedPitchSlot(key=item.key, pitch=item.pitch, slot=item.slot, seen=seen)


class StubFetcher:
    """In-memory fetcher keyed by pitch id.

    ``slots[pitch_id]`` is either a list of slots or an exception to raise.
    """

    def __init__(self, slots: Optional[Dict[str, Any]] = None) -> None:
        self.slots: Dict[str, Any] = dict(slots or {})
        self.calls: List[Tuple[str, datetime, datetime]] = []
        self.filter_calls: List[Sequence[Rule]] = []

    async def get_pitch_slots(self, pitch: Pitch, t1: datetime, t2: datetime) -> List[Slot]:
        self.calls.append((pitch.id, t1, t2))
        await asyncio.sleep(0)
        outcome = self.slots.get(pitch.id, [])
        if isinstance(outcome, Exception):
            raise outcome
        return list(outcome)

    def filter_slots_by_rules(self, slots: Sequence[Slot], rules: Sequence[Rule]) -> List[Slot]:
        self.filter_calls.append(list(rules))
        return filter_slots_by_rules(slots, rules)


class RecordingNotifier:
    def __init__(self, *, result: bool = True, error: Optional[Exception] = None) -> None:
        self.sent: List[str] = []
        self.result = result
        self.error = error

    async def send(self, text: str) -> bool:
        self.sent.append(text)
        if self.error is not None:
            raise self.error
        return self.result


def fixed_clock(moment: datetime = BASE_TIME):
    return lambda: moment
