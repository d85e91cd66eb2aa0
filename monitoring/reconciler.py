"""Fetch, filter and diff pitch slots against the tracker."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable, Dict, List, Optional, Protocol, Sequence, Tuple

import pytz

from infrastructure import constants
from monitoring.tracker import PitchSlotTracker, TrackedPitchSlot
from pitches.models import Pitch, Rule, Slot


class SlotFetcher(Protocol):
    """Upstream collaborator providing slots and rule filtering."""

    async def get_pitch_slots(self, pitch: Pitch, t1: datetime, t2: datetime) -> List[Slot]:
        ...

    def filter_slots_by_rules(self, slots: Sequence[Slot], rules: Sequence[Rule]) -> List[Slot]:
        ...


@dataclass
class ReconcileResult:
    """Outcome of one reconciliation pass."""

    window_start: datetime
    window_end: datetime
    added: List[str] = field(default_factory=list)
    refreshed: List[str] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)
    retained: List[str] = field(default_factory=list)
    failed_pitches: Dict[str, str] = field(default_factory=dict)

    def has_changes(self) -> bool:
        return bool(self.added or self.removed)

    def summary(self) -> str:
        text = (
            f"{len(self.added)} new, {len(self.refreshed)} still available, "
            f"{len(self.removed)} gone"
        )
        if self.failed_pitches:
            text += f", {len(self.failed_pitches)} pitch(es) failed to load"
        return text


class AvailabilityReconciler:
    """Re-sample every monitored pitch and reconcile the tracker.

    ``retain_on_fetch_failure`` keeps the tracked entries of a pitch whose
    fetch failed until a later pass fetches it successfully.
    """

    def __init__(
        self,
        fetcher: SlotFetcher,
        tracker: PitchSlotTracker,
        pitches: Sequence[Pitch],
        rules: Sequence[Rule],
        *,
        horizon: timedelta = timedelta(days=constants.DEFAULT_SAMPLE_HORIZON_DAYS),
        timezone: str = constants.DEFAULT_TIMEZONE,
        clock: Optional[Callable[[], datetime]] = None,
        retain_on_fetch_failure: bool = True,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if not pitches:
            raise ValueError("Need at least one pitch to check")
        if horizon <= timedelta(0):
            raise ValueError("Sampling horizon must be positive")

        self.fetcher = fetcher
        self.tracker = tracker
        self.pitches = list(pitches)
        self.rules = list(rules)
        self.horizon = horizon
        self.timezone = pytz.timezone(timezone)
        self._clock = clock or (lambda: datetime.now(self.timezone))
        self.retain_on_fetch_failure = retain_on_fetch_failure
        self.logger = logger or logging.getLogger('AvailabilityReconciler')

    def time_window(self) -> Tuple[datetime, datetime]:
        """Return ``[now, now + horizon)`` in the configured timezone."""

        now = self._clock()
        if now.tzinfo is None:
            now = self.timezone.localize(now)
        return now, now + self.horizon

    async def collect(
        self,
        t1: datetime,
        t2: datetime,
    ) -> Tuple[Dict[str, TrackedPitchSlot], Dict[str, str]]:
        """Fetch and filter every pitch, one at a time.

        Returns the working set keyed by pitch-slot key and the pitches that
        failed, mapped to their error text.
        """

        working_set: Dict[str, TrackedPitchSlot] = {}
        failures: Dict[str, str] = {}

        for pitch in self.pitches:
            try:
                slots = await self.fetcher.get_pitch_slots(pitch, t1, t2)
                passing = self.fetcher.filter_slots_by_rules(slots, self.rules)
            except Exception as exc:
                failures[pitch.id] = str(exc) or type(exc).__name__
                self.logger.warning("Failed to fetch slots for pitch %s: %s", pitch.id, exc)
                continue

            for slot in passing:
                try:
                    item = TrackedPitchSlot.from_sample(pitch, slot)
                except ValueError as exc:
                    self.logger.warning("Skipping slot %r on pitch %s: %s", slot.id, pitch.id, exc)
                    continue
                working_set[item.key] = item

            self.logger.debug(
                "Pitch %s: %s slots, %s passing rules",
                pitch.id,
                len(slots),
                len(passing),
            )

        return working_set, failures

    async def reconcile(self) -> ReconcileResult:
        """Run one full fetch-filter-diff pass."""

        t1, t2 = self.time_window()
        working_set, failures = await self.collect(t1, t2)

        retained_pitch_ids = failures.keys() if self.retain_on_fetch_failure else ()
        diff = self.tracker.reconcile(
            working_set,
            retained_pitch_ids=retained_pitch_ids,
            window_start=t1,
        )

        result = ReconcileResult(
            window_start=t1,
            window_end=t2,
            added=diff.added,
            refreshed=diff.refreshed,
            removed=diff.removed,
            retained=diff.retained,
            failed_pitches=failures,
        )
        self.logger.info("Reconciled pitch slots: %s", result.summary())
        return result


__all__ = ['AvailabilityReconciler', 'ReconcileResult', 'SlotFetcher']
