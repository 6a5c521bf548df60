"""Shared-state change notifications.

Write paths publish a typed event after the store accepted the change;
caches and other interested parts of the app subscribe per topic.
"""

import logging
import threading
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from functools import lru_cache
from typing import Any, Callable

from app.db import utcnow

log = logging.getLogger(__name__)


class Topic(str, Enum):
    POSTS = "posts"
    FOLLOWING = "following"
    LIKES = "likes"
    COMMENTS = "comments"
    NOTIFICATIONS = "notifications"
    PROFILE = "profile"
    CUSTOM_EXERCISES = "custom_exercises"


@dataclass(frozen=True)
class StateEvent:
    """One change to shared state."""
    topic: Topic
    user_id: str  # the user whose view of the data changed
    post_id: str | None = None
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=utcnow)


Subscriber = Callable[[StateEvent], None]


class StateEvents:
    """In-process publish/subscribe hub keyed by topic."""

    def __init__(self):
        self._subscribers: dict[Topic, list[Subscriber]] = defaultdict(list)
        self._lock = threading.RLock()

    def subscribe(self, topic: Topic, callback: Subscriber) -> None:
        with self._lock:
            self._subscribers[topic].append(callback)

    def unsubscribe(self, topic: Topic, callback: Subscriber) -> None:
        with self._lock:
            if callback in self._subscribers[topic]:
                self._subscribers[topic].remove(callback)

    def publish(self, event: StateEvent) -> int:
        """Deliver to every subscriber of the topic; returns how many were called."""
        with self._lock:
            subscribers = list(self._subscribers[event.topic])
        for callback in subscribers:
            try:
                callback(event)
            except Exception:
                # One broken listener must not starve the others
                log.exception("subscriber %r failed on %s", callback, event.topic.value)
        return len(subscribers)


@lru_cache
def get_state_events() -> StateEvents:
    return StateEvents()
