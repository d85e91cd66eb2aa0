"""Stable composite keys for (pitch, slot) pairs."""

from __future__ import annotations

from typing import Tuple
from urllib.parse import unquote

from infrastructure.constants import PITCH_SLOT_KEY_SEPARATOR

# Components are escaped so the separator never occurs inside one of them.
_ESCAPES = (("%", "%25"), (PITCH_SLOT_KEY_SEPARATOR, "%2D"))


def _escape(component: str) -> str:
    for raw, escaped in _ESCAPES:
        component = component.replace(raw, escaped)
    return component


def pitch_slot_key(pitch_id: str, slot_id: str) -> str:
    """Return the key identifying ``slot_id`` on ``pitch_id``.

    Numeric ids come out unchanged (``12345-678901``); ids containing the
    separator or ``%`` are percent-escaped so distinct pairs never collide.
    """

    pitch_id = str(pitch_id)
    slot_id = str(slot_id)
    if not pitch_id or not slot_id:
        raise ValueError("pitch and slot identifiers must be non-empty")
    return f"{_escape(pitch_id)}{PITCH_SLOT_KEY_SEPARATOR}{_escape(slot_id)}"


def split_pitch_slot_key(key: str) -> Tuple[str, str]:
    """Inverse of :func:`pitch_slot_key`."""

    parts = key.split(PITCH_SLOT_KEY_SEPARATOR)
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise ValueError(f"Malformed pitch-slot key: {key!r}")
    return unquote(parts[0]), unquote(parts[1])


__all__ = ["pitch_slot_key", "split_pitch_slot_key"]
