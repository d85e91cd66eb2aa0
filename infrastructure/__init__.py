"""Infrastructure helpers."""

from .settings import AppSettings, ConfigurationError, get_settings, load_settings
from .constants import *  # noqa: F401,F403

__all__ = ["AppSettings", "ConfigurationError", "get_settings", "load_settings"]
