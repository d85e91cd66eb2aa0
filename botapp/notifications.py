"""Incoming-webhook notification sink."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from infrastructure import constants


class WebhookNotifier:
    """Post one ``{"text": ...}`` payload per call to an incoming webhook.

    Delivery failures are logged and reported as ``False``; callers never
    see an exception from the network layer.
    """

    def __init__(
        self,
        webhook_url: str,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = constants.WEBHOOK_TIMEOUT_SECONDS,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.webhook_url = webhook_url
        self.timeout = timeout
        self.logger = logger or logging.getLogger('WebhookNotifier')
        self._client = http_client
        self._owns_client = http_client is None

    @staticmethod
    def build_payload(text: str) -> Dict[str, Any]:
        return {"text": text}

    async def send(self, text: str) -> bool:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)

        try:
            response = await self._client.post(self.webhook_url, json=self.build_payload(text))
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self.logger.error("Webhook HTTP error: %s", exc)
            return False
        except httpx.RequestError as exc:
            self.logger.error("Webhook request error: %s", exc)
            return False

        self.logger.debug("Delivered notification (%s chars)", len(text))
        return True

    async def close(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
        self._client = None


__all__ = ['WebhookNotifier']
