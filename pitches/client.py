"""Async client for the MyLocalPitch slot API."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional
from urllib.parse import quote

import httpx
import pytz

from infrastructure import constants
from pitches.models import Pitch, Rule, Slot
from pitches.rules import filter_slots_by_rules


class FetchError(RuntimeError):
    """Raised when slots for a pitch cannot be fetched or understood."""

    def __init__(self, pitch: Pitch, message: str) -> None:
        super().__init__(f"{pitch.name} ({pitch.id}): {message}")
        self.pitch = pitch


class MLPClient:
    """Fetch and filter pitch slots from MyLocalPitch.

    The HTTP client is created lazily so the object can be built outside a
    running event loop; pass ``http_client`` to inject a preconfigured
    :class:`httpx.AsyncClient` (tests use :class:`httpx.MockTransport`).
    """

    def __init__(
        self,
        base_url: str = constants.MLP_API_URL,
        *,
        timezone: str = constants.DEFAULT_TIMEZONE,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = constants.MLP_REQUEST_TIMEOUT_SECONDS,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.base_url = base_url.rstrip('/')
        self.timezone = pytz.timezone(timezone)
        self.timeout = timeout
        self.logger = logger or logging.getLogger('MLPClient')
        self._client = http_client
        self._owns_client = http_client is None

    def _http(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def get_pitch_slots(self, pitch: Pitch, t1: datetime, t2: datetime) -> List[Slot]:
        """Return slots of ``pitch`` starting inside ``[t1, t2)``."""

        url = self.base_url + constants.MLP_SLOTS_PATH.format(pitch_id=quote(pitch.id, safe=''))
        params = {
            'filter[starts]': t1.strftime(constants.MLP_DATE_FORMAT),
            'filter[ends]': t2.strftime(constants.MLP_DATE_FORMAT),
        }

        try:
            response = await self._http().get(url, params=params)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            raise FetchError(pitch, f"HTTP {exc.response.status_code}") from exc
        except httpx.RequestError as exc:
            raise FetchError(pitch, f"request failed: {exc}") from exc
        except ValueError as exc:
            raise FetchError(pitch, "response was not valid JSON") from exc

        slots = self._parse_slots(pitch, payload)
        in_window = [slot for slot in slots if t1 <= slot.starts < t2]
        self.logger.debug(
            "Fetched %s slots for pitch %s (%s in window)",
            len(slots),
            pitch.id,
            len(in_window),
        )
        return in_window

    def filter_slots_by_rules(self, slots: Iterable[Slot], rules: Iterable[Rule]) -> List[Slot]:
        return filter_slots_by_rules(slots, rules)

    def checkout_link(self, pitch: Pitch, slot: Slot) -> str:
        """Return the URL that starts a booking for ``slot``."""

        return constants.MLP_CHECKOUT_URL.format(
            city=quote(pitch.city or 'london', safe=''),
            venue_path=quote(pitch.venue_path or pitch.venue_id, safe=''),
            pitch_id=quote(pitch.id, safe=''),
            starts=quote(slot.starts.isoformat(), safe=''),
            ends=quote(slot.ends.isoformat(), safe=''),
        )

    async def close(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
        self._client = None

    # ------------------------------------------------------------------
    # Payload parsing
    # ------------------------------------------------------------------
    def _parse_slots(self, pitch: Pitch, payload: Any) -> List[Slot]:
        if not isinstance(payload, Mapping) or not isinstance(payload.get('data'), list):
            raise FetchError(pitch, "unexpected payload shape")

        slots: List[Slot] = []
        for entry in payload['data']:
            try:
                slots.append(self._parse_slot(entry))
            except (KeyError, TypeError, ValueError) as exc:
                self.logger.warning("Skipping malformed slot for pitch %s: %s", pitch.id, exc)
        return slots

    def _parse_slot(self, entry: Mapping[str, Any]) -> Slot:
        attributes: Dict[str, Any] = entry.get('attributes') or {}
        slot_id = entry.get('id')
        if slot_id is None or str(slot_id) == '':
            raise ValueError("slot has no id")
        return Slot(
            id=str(slot_id),
            starts=self._parse_datetime(attributes['starts']),
            ends=self._parse_datetime(attributes['ends']),
            price=float(attributes.get('price') or 0),
            currency=str(attributes.get('currency') or 'GBP'),
            availabilities=int(attributes.get('availabilities', 1)),
        )

    def _parse_datetime(self, value: str) -> datetime:
        parsed = datetime.fromisoformat(str(value).replace('Z', '+00:00'))
        if parsed.tzinfo is None:
            return self.timezone.localize(parsed)
        return parsed.astimezone(self.timezone)


__all__ = ['FetchError', 'MLPClient']
