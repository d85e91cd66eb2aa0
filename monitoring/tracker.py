"""
Pitch-slot tracker

Keeps the current view of filtered pitch slots keyed by pitch-slot key and
remembers which of them have already been reported. The tracker is shared
by the notification ticker and the command handlers, so every operation
runs under a single lock.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Collection, Dict, List, Mapping, Optional

from monitoring.identity import pitch_slot_key
from pitches.models import Pitch, Slot


@dataclass(frozen=True)
class TrackedPitchSlot:
    """One (pitch, slot) pairing currently believed available."""

    key: str
    pitch: Pitch
    slot: Slot
    seen: bool = False

    @classmethod
    def from_sample(cls, pitch: Pitch, slot: Slot) -> "TrackedPitchSlot":
        return cls(key=pitch_slot_key(pitch.id, slot.id), pitch=pitch, slot=slot)


@dataclass
class TrackerDiff:
    """Keys touched by one reconciliation pass."""

    added: List[str] = field(default_factory=list)
    refreshed: List[str] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)
    retained: List[str] = field(default_factory=list)

    def has_changes(self) -> bool:
        return bool(self.added or self.removed)


def _presentation_order(item: TrackedPitchSlot):
    return (item.slot.starts, item.pitch.name, item.key)


class PitchSlotTracker:
    """
    Thread-safe mapping of pitch-slot key to :class:`TrackedPitchSlot`.

    Entries are immutable; marking an entry seen swaps in a new value, so
    anything handed out by :meth:`get` or :meth:`snapshot` stays stable.
    """

    def __init__(self, *, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or logging.getLogger('PitchSlotTracker')
        self._items: Dict[str, TrackedPitchSlot] = {}
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._items

    def upsert(self, item: TrackedPitchSlot) -> TrackedPitchSlot:
        """Insert ``item`` or refresh the existing entry, keeping its seen flag."""

        with self._lock:
            return self._upsert_locked(item)

    def remove(self, key: str) -> bool:
        """Remove ``key``; returns False when it was not tracked."""

        with self._lock:
            return self._items.pop(key, None) is not None

    def get(self, key: str) -> Optional[TrackedPitchSlot]:
        with self._lock:
            return self._items.get(key)

    def snapshot(self) -> Dict[str, TrackedPitchSlot]:
        with self._lock:
            return dict(self._items)

    def all_items(self) -> List[TrackedPitchSlot]:
        """Every tracked entry, ordered by slot start time."""

        return sorted(self.snapshot().values(), key=_presentation_order)

    def unseen(self) -> List[TrackedPitchSlot]:
        """Entries not reported yet. Read-only: seen flags are left alone."""

        return [item for item in self.all_items() if not item.seen]

    def sweep_unseen(self) -> List[TrackedPitchSlot]:
        """Collect unseen entries and mark them seen in one step."""

        with self._lock:
            collected = sorted(
                (item for item in self._items.values() if not item.seen),
                key=_presentation_order,
            )
            for item in collected:
                self._items[item.key] = replace(item, seen=True)

        if collected:
            self.logger.info("Marked %s pitch slots as seen", len(collected))
        return collected

    def reconcile(
        self,
        working_set: Mapping[str, TrackedPitchSlot],
        *,
        retained_pitch_ids: Collection[str] = (),
        window_start: Optional[datetime] = None,
    ) -> TrackerDiff:
        """Bring the tracker in line with ``working_set`` as one unit.

        Tracked keys missing from ``working_set`` are removed unless their
        pitch is listed in ``retained_pitch_ids``. Retained entries that start
        before ``window_start`` are removed all the same. Keys present are
        refreshed, and new keys are inserted unseen.
        """

        diff = TrackerDiff()
        retained = set(retained_pitch_ids)

        with self._lock:
            for key, item in list(self._items.items()):
                if key in working_set:
                    continue
                if item.pitch.id in retained and not (
                    window_start is not None and item.slot.starts < window_start
                ):
                    diff.retained.append(key)
                    continue
                del self._items[key]
                diff.removed.append(key)

            for key in [key for key in working_set if key in self._items]:
                self._upsert_locked(working_set[key])
                diff.refreshed.append(key)

            for key, item in working_set.items():
                if key in self._items:
                    continue
                self._items[key] = replace(item, seen=False)
                diff.added.append(key)

            size = len(self._items)

        self.logger.debug(
            "Tracker reconciled: +%s ~%s -%s (retained %s, size %s)",
            len(diff.added),
            len(diff.refreshed),
            len(diff.removed),
            len(diff.retained),
            size,
        )
        return diff

    def _upsert_locked(self, item: TrackedPitchSlot) -> TrackedPitchSlot:
        existing = self._items.get(item.key)
        if existing is not None and existing.seen != item.seen:
            item = replace(item, seen=existing.seen)
        self._items[item.key] = item
        return item


__all__ = ['PitchSlotTracker', 'TrackedPitchSlot', 'TrackerDiff']
