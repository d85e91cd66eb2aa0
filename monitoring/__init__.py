"""Availability tracking: pitch-slot keys, the tracker, reconciliation and the ticker."""

from .identity import pitch_slot_key, split_pitch_slot_key
from .tracker import PitchSlotTracker, TrackedPitchSlot, TrackerDiff
from .reconciler import AvailabilityReconciler, ReconcileResult
from .notification_ticker import NotificationTicker, TickerFiring, TickerState

__all__ = [
    'AvailabilityReconciler',
    'NotificationTicker',
    'PitchSlotTracker',
    'ReconcileResult',
    'TickerFiring',
    'TickerState',
    'TrackedPitchSlot',
    'TrackerDiff',
    'pitch_slot_key',
    'split_pitch_slot_key',
]
