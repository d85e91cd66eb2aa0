"""
Notification ticker

Periodically reconciles the tracker and reports the slots nobody has been
told about yet. Firings never overlap: a tick arriving while a pass is
running is skipped, and a manual refresh waits for the running pass.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Protocol, Sequence

from infrastructure import constants
from monitoring.reconciler import AvailabilityReconciler, ReconcileResult
from monitoring.tracker import PitchSlotTracker, TrackedPitchSlot


class Notifier(Protocol):
    async def send(self, text: str) -> bool:
        ...


BatchFormatter = Callable[[Sequence[TrackedPitchSlot]], str]


class TickerState(Enum):
    IDLE = "idle"
    RUNNING = "running"


@dataclass
class TickerFiring:
    """Summary of one ticker firing."""

    result: ReconcileResult
    reported: List[TrackedPitchSlot] = field(default_factory=list)
    delivered: bool = False


class NotificationTicker:
    """Drive reconciliation every ``interval_minutes`` and notify new slots."""

    def __init__(
        self,
        reconciler: AvailabilityReconciler,
        tracker: PitchSlotTracker,
        notifier: Notifier,
        formatter: BatchFormatter,
        *,
        interval_minutes: int,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if int(interval_minutes) < constants.MIN_TICKER_INTERVAL_MINUTES:
            raise ValueError(
                f"Ticker interval must be at least {constants.MIN_TICKER_INTERVAL_MINUTES} minute(s)"
            )

        self.reconciler = reconciler
        self.tracker = tracker
        self.notifier = notifier
        self.formatter = formatter
        self.interval_minutes = int(interval_minutes)
        self.logger = logger or logging.getLogger('NotificationTicker')
        self.running = False
        self.state = TickerState.IDLE
        self.firings = 0
        self.skipped_firings = 0
        self._pass_lock = asyncio.Lock()

    @property
    def interval_seconds(self) -> float:
        return self.interval_minutes * 60.0

    async def run_async(self) -> None:
        """Fire once per interval until :meth:`stop` is called."""

        self.logger.info("Launching notification ticker (every %s minute(s))", self.interval_minutes)
        self.running = True
        while self.running:
            try:
                await asyncio.sleep(self.interval_seconds)
                if not self.running:
                    break
                await self.fire()
            except asyncio.CancelledError:
                self.logger.info("Notification ticker cancelled")
                raise
            except Exception as exc:  # pragma: no cover - defensive guard
                self.logger.error("Ticker error: %s", exc, exc_info=True)
                await asyncio.sleep(constants.TICKER_ERROR_BACKOFF_SECONDS)

        self.logger.info("Notification ticker stopped")

    async def fire(self) -> Optional[TickerFiring]:
        """Reconcile, sweep unseen slots and hand them to the notifier.

        Returns ``None`` when skipped because another pass is running.
        """

        if self._pass_lock.locked():
            self.skipped_firings += 1
            self.logger.warning("Previous pass still running; skipping this tick")
            return None

        async with self._pass_lock:
            self.state = TickerState.RUNNING
            try:
                result = await self.reconciler.reconcile()
                reported = self.tracker.sweep_unseen()
                delivered = await self._deliver(self.formatter(reported))
            finally:
                self.state = TickerState.IDLE

        self.firings += 1
        self.logger.info(
            "Ticker firing %s: %s; reported %s slot(s), delivered=%s",
            self.firings,
            result.summary(),
            len(reported),
            delivered,
        )
        return TickerFiring(result=result, reported=reported, delivered=delivered)

    async def refresh(self) -> ReconcileResult:
        """Reconcile on demand without reporting; queues behind a running pass."""

        async with self._pass_lock:
            self.state = TickerState.RUNNING
            try:
                return await self.reconciler.reconcile()
            finally:
                self.state = TickerState.IDLE

    async def stop(self) -> None:
        self.logger.info("Stopping notification ticker")
        self.running = False

    async def _deliver(self, text: str) -> bool:
        try:
            delivered = bool(await self.notifier.send(text))
        except Exception as exc:
            self.logger.error("Notification delivery failed: %s", exc, exc_info=True)
            return False
        if not delivered:
            self.logger.warning("Notification sink rejected the batch")
        return delivered


__all__ = ['BatchFormatter', 'NotificationTicker', 'Notifier', 'TickerFiring', 'TickerState']
