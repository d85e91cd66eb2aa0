"""Value objects shared between the upstream client and the tracker."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Callable, Mapping


@dataclass(frozen=True)
class Pitch:
    """A monitored bookable pitch."""

    id: str
    name: str
    venue_id: str = ""
    venue_path: str = ""
    city: str = ""
    location: str = ""

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "Pitch":
        pitch_id = str(payload["id"]).strip()
        return cls(
            id=pitch_id,
            name=str(payload.get("name") or pitch_id),
            venue_id=str(payload.get("venue_id") or pitch_id),
            venue_path=str(payload.get("venue_path") or ""),
            city=str(payload.get("city") or ""),
            location=str(payload.get("location") or ""),
        )


@dataclass(frozen=True)
class Slot:
    """A bookable time interval offered by a pitch."""

    id: str
    starts: datetime
    ends: datetime
    price: float = 0.0
    currency: str = "GBP"
    availabilities: int = 1

    @property
    def duration(self) -> timedelta:
        return self.ends - self.starts


@dataclass(frozen=True)
class Rule:
    """A described predicate deciding whether a slot is interesting."""

    description: str
    predicate: Callable[[Slot], bool] = field(compare=False, repr=False)

    def applies(self, slot: Slot) -> bool:
        return bool(self.predicate(slot))


__all__ = ["Pitch", "Slot", "Rule"]
