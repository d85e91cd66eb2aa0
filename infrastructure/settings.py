"""Centralized application settings.

All runtime configuration is read here, once, at startup. The resulting
:class:`AppSettings` value is passed explicitly into the bot, the
reconciler, the ticker and the notifier; nothing under ``monitoring`` reads
the environment.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple
from urllib.parse import urlparse

import pytz
from dotenv import load_dotenv

from . import constants


class ConfigurationError(RuntimeError):
    """Raised when startup configuration is missing or malformed."""


def _to_bool(value: Optional[str], default: bool = False) -> bool:
    """Normalize environment strings such as "true"/"1" into booleans."""

    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class AppSettings:
    """Immutable snapshot of high-level configuration values."""

    bot_token: str
    incoming_webhook_url: str
    ticker_interval_minutes: int
    timezone: str
    sample_horizon_days: int
    mlp_api_url: str
    pitches: Tuple[Dict[str, Any], ...]
    production_mode: bool
    log_directory: str


def _require(env: Mapping[str, str], name: str) -> str:
    value = (env.get(name) or "").strip()
    if not value:
        raise ConfigurationError(f"Missing required setting {name}")
    return value


def _parse_positive_int(raw: Optional[str], name: str, *, minimum: int = 1) -> int:
    """Parse a whole number setting, rejecting anything below ``minimum``."""

    if raw is None or not raw.strip():
        raise ConfigurationError(f"Missing required setting {name}")
    try:
        value = int(raw.strip())
    except ValueError as exc:
        raise ConfigurationError(f"Unable to parse {name}: {raw!r}") from exc
    if value < minimum:
        raise ConfigurationError(f"{name} must be at least {minimum}, got {value}")
    return value


def _validate_url(url: str, name: str) -> str:
    parsed = urlparse(url)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ConfigurationError(f"{name} is not a valid http(s) URL: {url!r}")
    return url


def _validate_timezone(name: str) -> str:
    try:
        pytz.timezone(name)
    except pytz.UnknownTimeZoneError as exc:
        raise ConfigurationError(f"Unknown timezone {name!r}") from exc
    return name


def load_pitch_catalogue(path: Optional[str]) -> List[Dict[str, Any]]:
    """Return pitch definitions from ``path`` or the built-in defaults."""

    if not path:
        pitches = [dict(pitch) for pitch in constants.DEFAULT_PITCHES]
    else:
        try:
            payload = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise ConfigurationError(f"Unable to read pitches file {path}: {exc}") from exc
        if not isinstance(payload, list):
            raise ConfigurationError(f"Pitches file {path} must contain a JSON list")
        pitches = []
        for entry in payload:
            if not isinstance(entry, dict) or not str(entry.get("id", "")).strip():
                raise ConfigurationError(f"Invalid pitch entry in {path}: {entry!r}")
            pitches.append(dict(entry))

    if not pitches:
        raise ConfigurationError("Need at least one pitch to check")
    return pitches


def load_settings(env: Optional[Mapping[str, str]] = None) -> AppSettings:
    """Load configuration from the environment.

    Raises :class:`ConfigurationError` for anything that would leave the
    ticker running with invalid settings.
    """

    if env is None:
        load_dotenv(override=False)
        env = os.environ

    bot_token = _require(env, "TELEGRAM_BOT_TOKEN")
    webhook_url = _validate_url(_require(env, "INCOMING_WEBHOOK_URL"), "INCOMING_WEBHOOK_URL")
    ticker_interval = _parse_positive_int(
        env.get("TICKER_INTERVAL"),
        "TICKER_INTERVAL",
        minimum=constants.MIN_TICKER_INTERVAL_MINUTES,
    )

    timezone = _validate_timezone(env.get("BOT_TIMEZONE", constants.DEFAULT_TIMEZONE))
    horizon_days = _parse_positive_int(
        env.get("SAMPLE_HORIZON_DAYS", str(constants.DEFAULT_SAMPLE_HORIZON_DAYS)),
        "SAMPLE_HORIZON_DAYS",
    )
    mlp_api_url = _validate_url(env.get("MLP_API_URL", constants.MLP_API_URL), "MLP_API_URL")
    pitches = load_pitch_catalogue(env.get("PITCHES_FILE"))

    production_mode = _to_bool(env.get("PRODUCTION_MODE"), default=False)
    log_directory = env.get("LOG_DIRECTORY", "logs")

    return AppSettings(
        bot_token=bot_token,
        incoming_webhook_url=webhook_url,
        ticker_interval_minutes=ticker_interval,
        timezone=timezone,
        sample_horizon_days=horizon_days,
        mlp_api_url=mlp_api_url.rstrip("/"),
        pitches=tuple(pitches),
        production_mode=production_mode,
        log_directory=log_directory,
    )


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Return a cached :class:`AppSettings` instance."""

    return load_settings()
