"""Pitch models, slot rules, and the MyLocalPitch client."""

from .models import Pitch, Rule, Slot
from .client import FetchError, MLPClient
from .rules import default_rules, filter_slots_by_rules

__all__ = [
    'FetchError',
    'MLPClient',
    'Pitch',
    'Rule',
    'Slot',
    'default_rules',
    'filter_slots_by_rules',
]
