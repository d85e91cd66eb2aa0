"""Dependency container wiring the availability engine to its collaborators."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

from monitoring.notification_ticker import NotificationTicker
from monitoring.reconciler import AvailabilityReconciler
from monitoring.tracker import PitchSlotTracker
from pitches.client import MLPClient
from pitches.models import Rule
from pitches.rules import default_rules

from botapp.commands.service import CommandService
from botapp.config import BotAppConfig
from botapp.notifications import WebhookNotifier
from botapp.ui.slots import format_unseen_batch


@dataclass(frozen=True)
class BotDependencies:
    """Concrete dependency snapshot for the bot runtime."""

    config: BotAppConfig
    client: MLPClient
    tracker: PitchSlotTracker
    reconciler: AvailabilityReconciler
    notifier: WebhookNotifier
    ticker: NotificationTicker
    commands: CommandService

    def as_dict(self) -> Dict[str, Any]:
        """Return dependencies as a mapping keyed by attribute name."""

        return {
            'config': self.config,
            'client': self.client,
            'tracker': self.tracker,
            'reconciler': self.reconciler,
            'notifier': self.notifier,
            'ticker': self.ticker,
            'commands': self.commands,
        }


class DependencyContainer:
    """Build the runtime components once, with optional overrides for tests."""

    def __init__(
        self,
        config: BotAppConfig,
        *,
        rules: Optional[Sequence[Rule]] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.config = config
        self.rules = list(rules) if rules is not None else default_rules()
        self._overrides = dict(overrides or {})
        self._dependencies: Optional[BotDependencies] = None
        self.logger = logging.getLogger('RoboRooney')

    def _get(self, name: str, factory):
        if name in self._overrides:
            return self._overrides[name]
        return factory()

    def build_dependencies(self) -> BotDependencies:
        if self._dependencies is not None:
            return self._dependencies

        config = self.config
        client = self._get(
            'client',
            lambda: MLPClient(config.upstream.api_url, timezone=config.ticker.timezone),
        )
        tracker = self._get('tracker', PitchSlotTracker)
        reconciler = self._get(
            'reconciler',
            lambda: AvailabilityReconciler(
                client,
                tracker,
                config.upstream.pitches,
                self.rules,
                horizon=config.ticker.sample_horizon,
                timezone=config.ticker.timezone,
            ),
        )
        notifier = self._get('notifier', lambda: WebhookNotifier(config.ticker.webhook_url))
        ticker = self._get(
            'ticker',
            lambda: NotificationTicker(
                reconciler,
                tracker,
                notifier,
                format_unseen_batch,
                interval_minutes=config.ticker.interval_minutes,
            ),
        )
        commands = self._get(
            'commands',
            lambda: CommandService(
                tracker,
                ticker,
                config.upstream.pitches,
                self.rules,
                client.checkout_link,
            ),
        )

        self._dependencies = BotDependencies(
            config=config,
            client=client,
            tracker=tracker,
            reconciler=reconciler,
            notifier=notifier,
            ticker=ticker,
            commands=commands,
        )
        self.logger.info(
            "Monitoring %s pitch(es) with %s rule(s)",
            len(config.upstream.pitches),
            len(self.rules),
        )
        return self._dependencies


__all__ = ['BotDependencies', 'DependencyContainer']
