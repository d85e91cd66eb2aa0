"""Lifecycle orchestration for the bot runtime."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from botapp.bootstrap import BotDependencies


class LifecycleManager:
    """Manage startup, shutdown, and the notification ticker task."""

    def __init__(
        self,
        dependencies: BotDependencies,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.dependencies = dependencies
        self.logger = logger or logging.getLogger('LifecycleManager')
        self.application = None
        self.ticker_task: Optional[asyncio.Task] = None

    async def post_init(self, application) -> None:
        """Start the ticker once the Telegram application is ready."""

        self.application = application
        ticker = self.dependencies.ticker
        self.ticker_task = asyncio.create_task(ticker.run_async())
        self.logger.info(
            "Notification ticker task created (every %s minute(s))",
            ticker.interval_minutes,
        )
        self.logger.info("Bot started successfully - awaiting messages...")

    async def post_stop(self, application) -> None:
        """Stop the ticker and release HTTP clients."""

        self.logger.info("🔴 Starting bot shutdown sequence...")

        if self.ticker_task:
            self.logger.info("🔄 Stopping notification ticker...")
            await self.dependencies.ticker.stop()
            self.ticker_task.cancel()
            try:
                await self.ticker_task
            except asyncio.CancelledError:
                pass
            self.ticker_task = None
            self.logger.info("✅ Notification ticker stopped")

        for name, closable in (
            ('upstream client', self.dependencies.client),
            ('notifier', self.dependencies.notifier),
        ):
            try:
                await closable.close()
            except Exception as exc:  # pragma: no cover - defensive guard
                self.logger.error("❌ Error closing %s: %s", name, exc)

        self.logger.info("✅ Bot shutdown sequence completed")
        self.application = None


__all__ = ['LifecycleManager']
