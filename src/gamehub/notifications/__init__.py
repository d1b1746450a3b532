# src/gamehub/notifications/__init__.py

"""Live score update broadcasting."""

from gamehub import config

from .base import Connection, Notifier, ScoreUpdateEvent
from .memory import InMemoryNotifier, Subscription
from .redis_notifier import RedisNotifier

__all__ = [
    "Connection",
    "InMemoryNotifier",
    "Notifier",
    "RedisNotifier",
    "ScoreUpdateEvent",
    "Subscription",
    "build_notifier",
]


def build_notifier() -> Notifier:
    """Pick the backend: Redis when REDIS_URL is configured, else in-process."""
    if config.REDIS_URL:
        return RedisNotifier.from_url(config.REDIS_URL)
    return InMemoryNotifier()
