"""
Read-through cache for per-user data (workout history, custom exercises).

The store is the source of truth. Entries live under keys of the form
``musclegram_<subject>_<userId>`` and are served only while fresh: an entry
is stale once it is older than the TTL or once a state event for that user
and subject has marked it. Stale entries are reloaded from the store on the
next read. When a directory is configured each entry is also mirrored to a
JSON file so a restarted process starts warm; file errors are logged only.
"""

import json
import logging
import threading
import time
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Callable, Optional

from app.services.events import StateEvent, StateEvents, Topic, get_state_events
from app.settings import get_settings

log = logging.getLogger(__name__)

KEY_PREFIX = "musclegram"

# subject -> topics that make it stale
SUBJECT_TOPICS = {
    "workoutExercises": (Topic.POSTS,),
    "customExercises": (Topic.CUSTOM_EXERCISES,),
}


def cache_key(subject: str, user_id: str) -> str:
    return f"{KEY_PREFIX}_{subject}_{user_id}"


@dataclass
class CacheEntry:
    value: Any
    stored_at: float
    stale: bool = False

    def to_dict(self) -> dict:
        return {"value": self.value, "stored_at": self.stored_at, "stale": self.stale}

    @classmethod
    def from_dict(cls, data: dict) -> "CacheEntry":
        return cls(value=data["value"], stored_at=float(data["stored_at"]), stale=bool(data.get("stale", False)))


class LocalCache:
    def __init__(
        self,
        ttl_seconds: float = 300,
        directory: Optional[Path] = None,
        events: Optional[StateEvents] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.ttl_seconds = ttl_seconds
        self.directory = Path(directory) if directory else None
        self.clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._generations: dict[str, int] = {}
        self._lock = threading.RLock()
        if self.directory:
            self._load_directory()
        if events is not None:
            for subject, topics in SUBJECT_TOPICS.items():
                for topic in topics:
                    events.subscribe(topic, self._invalidator(subject))

    # READS
    def peek(self, subject: str, user_id: str) -> Optional[CacheEntry]:
        with self._lock:
            return self._entries.get(cache_key(subject, user_id))

    def is_fresh(self, entry: CacheEntry) -> bool:
        return not entry.stale and (self.clock() - entry.stored_at) < self.ttl_seconds

    def get_or_load(self, subject: str, user_id: str, loader: Callable[[], Any]) -> Any:
        """Serve a fresh entry, otherwise call loader and remember its result.

        If the key is invalidated while the loader runs, the result is still
        returned but stored as stale, so the next read goes back to the store.
        """
        key = cache_key(subject, user_id)
        with self._lock:
            entry = self._entries.get(key)
            generation = self._generations.get(key, 0)
        if entry is not None and self.is_fresh(entry):
            return entry.value
        value = loader()
        with self._lock:
            stale = self._generations.get(key, 0) != generation
            self._store(key, CacheEntry(value=value, stored_at=self.clock(), stale=stale))
        return value

    # WRITES
    def put(self, subject: str, user_id: str, value: Any) -> None:
        self._store(cache_key(subject, user_id), CacheEntry(value=value, stored_at=self.clock()))

    def invalidate(self, subject: str, user_id: str) -> bool:
        """Mark the entry stale; returns False when nothing was cached yet."""
        key = cache_key(subject, user_id)
        with self._lock:
            # bumped even without an entry so an in-flight load can tell
            self._generations[key] = self._generations.get(key, 0) + 1
            entry = self._entries.get(key)
            if entry is None:
                return False
            entry.stale = True
        self._persist(key, entry)
        return True

    def _store(self, key: str, entry: CacheEntry) -> None:
        with self._lock:
            self._entries[key] = entry
        self._persist(key, entry)

    def _invalidator(self, subject: str) -> Callable[[StateEvent], None]:
        def on_event(event: StateEvent) -> None:
            self.invalidate(subject, event.user_id)
        return on_event

    # FILES
    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def _persist(self, key: str, entry: CacheEntry) -> None:
        if not self.directory:
            return
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with open(self._path(key), "w") as f:
                json.dump(entry.to_dict(), f, default=str)
        except (OSError, TypeError) as e:
            log.warning("could not persist cache entry %s: %s", key, e)

    def _load_directory(self) -> None:
        if not self.directory.exists():
            return
        for path in self.directory.glob(f"{KEY_PREFIX}_*.json"):
            try:
                with open(path) as f:
                    self._entries[path.stem] = CacheEntry.from_dict(json.load(f))
            except (OSError, ValueError, KeyError) as e:
                log.warning("ignoring unreadable cache file %s: %s", path, e)


@lru_cache
def get_local_cache() -> LocalCache:
    s = get_settings()
    return LocalCache(
        ttl_seconds=s.LOCAL_CACHE_TTL_SECONDS,
        directory=Path(s.LOCAL_CACHE_DIR) if s.LOCAL_CACHE_DIR else None,
        events=get_state_events(),
    )
