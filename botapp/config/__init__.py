"""Structured configuration loaders for the bot runtime."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional, Tuple

from infrastructure.settings import AppSettings, get_settings
from pitches.models import Pitch


@dataclass(frozen=True)
class TelegramConfig:
    """Telegram-specific settings for the command surface."""

    token: str
    production_mode: bool


@dataclass(frozen=True)
class TickerConfig:
    """Parameters of the periodic reconcile-and-notify cycle."""

    interval_minutes: int
    timezone: str
    sample_horizon_days: int
    webhook_url: str

    @property
    def sample_horizon(self) -> timedelta:
        return timedelta(days=self.sample_horizon_days)


@dataclass(frozen=True)
class UpstreamConfig:
    """Where slots come from and which pitches are watched."""

    api_url: str
    pitches: Tuple[Pitch, ...]


@dataclass(frozen=True)
class PathsConfig:
    log_directory: str


@dataclass(frozen=True)
class BotAppConfig:
    """Aggregated configuration snapshot for the bot."""

    telegram: TelegramConfig
    ticker: TickerConfig
    upstream: UpstreamConfig
    paths: PathsConfig

    @property
    def timezone(self) -> str:
        return self.ticker.timezone

    @property
    def pitches(self) -> Tuple[Pitch, ...]:
        return self.upstream.pitches


def _build_config_from_settings(settings: AppSettings) -> BotAppConfig:
    """Translate :class:`AppSettings` values into runtime config objects."""

    telegram = TelegramConfig(
        token=settings.bot_token,
        production_mode=settings.production_mode,
    )

    ticker = TickerConfig(
        interval_minutes=settings.ticker_interval_minutes,
        timezone=settings.timezone,
        sample_horizon_days=settings.sample_horizon_days,
        webhook_url=settings.incoming_webhook_url,
    )

    upstream = UpstreamConfig(
        api_url=settings.mlp_api_url,
        pitches=tuple(Pitch.from_mapping(entry) for entry in settings.pitches),
    )

    paths = PathsConfig(log_directory=settings.log_directory)

    return BotAppConfig(
        telegram=telegram,
        ticker=ticker,
        upstream=upstream,
        paths=paths,
    )


def load_bot_config(settings: Optional[AppSettings] = None) -> BotAppConfig:
    """Load the bot configuration from shared application settings."""

    if settings is None:
        settings = get_settings()
    return _build_config_from_settings(settings)


__all__ = [
    'BotAppConfig',
    'PathsConfig',
    'TelegramConfig',
    'TickerConfig',
    'UpstreamConfig',
    'load_bot_config',
]
