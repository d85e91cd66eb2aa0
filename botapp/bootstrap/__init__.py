"""Bootstrap helpers for wiring bot components."""

from .container import BotDependencies, DependencyContainer

__all__ = [
    'BotDependencies',
    'DependencyContainer',
]
