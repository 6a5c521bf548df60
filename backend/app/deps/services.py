# app/deps/services.py
from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from app.db import get_db
from app.services.engagement import EngagementAggregator, EngagementCache
from app.services.events import StateEvents, get_state_events
from app.services.local_cache import LocalCache, get_local_cache
from app.services.notifier import NotificationEmitter
from app.settings import get_settings

def get_events() -> StateEvents:
    return get_state_events()

@lru_cache
def _engagement_cache() -> EngagementCache:
    return EngagementCache(get_state_events())

def get_engagement_cache() -> EngagementCache | None:
    if not get_settings().ENGAGEMENT_CACHE_ENABLED:
        return None
    return _engagement_cache()

def get_aggregator(
    db: Session = Depends(get_db),
    cache: EngagementCache | None = Depends(get_engagement_cache),
) -> EngagementAggregator:
    return EngagementAggregator(db, cache)

def get_notifier(
    db: Session = Depends(get_db),
    events: StateEvents = Depends(get_events),
) -> NotificationEmitter:
    return NotificationEmitter(db, events)

def get_cache() -> LocalCache:
    return get_local_cache()
