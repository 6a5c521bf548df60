"""Per-post like/comment aggregation relative to a viewer."""

import threading
from dataclasses import dataclass
from typing import Iterable

from sqlalchemy.orm import Session

from app.repositories.comment_repo import CommentRepository
from app.repositories.like_repo import LikeRepository
from app.services.events import StateEvent, StateEvents, Topic


@dataclass(frozen=True)
class Engagement:
    post_id: str
    likes_count: int
    comments_count: int
    viewer_has_liked: bool


class EngagementCache:
    """Summaries keyed by (viewer_id, post_id).

    Nothing expires. An entry is only replaced when the viewer's own like,
    unlike or comment publishes a fresh value, so other users' activity is
    not reflected until the process restarts or the entry is overwritten.
    """

    def __init__(self, events: StateEvents | None = None):
        self._entries: dict[tuple[str, str], Engagement] = {}
        self._lock = threading.Lock()
        if events is not None:
            events.subscribe(Topic.LIKES, self._on_event)
            events.subscribe(Topic.COMMENTS, self._on_event)

    def get(self, viewer_id: str, post_id: str) -> Engagement | None:
        with self._lock:
            return self._entries.get((viewer_id, post_id))

    def put(self, viewer_id: str, summary: Engagement) -> None:
        with self._lock:
            self._entries[(viewer_id, summary.post_id)] = summary

    def __len__(self) -> int:
        return len(self._entries)

    def _on_event(self, event: StateEvent) -> None:
        summary = event.data.get("engagement")
        if isinstance(summary, Engagement):
            self.put(event.user_id, summary)


class EngagementAggregator:
    def __init__(self, db: Session, cache: EngagementCache | None = None):
        self.likes = LikeRepository(db)
        self.comments = CommentRepository(db)
        self.cache = cache

    def compute(self, post_id: str, viewer_id: str | None) -> Engagement:
        """Always reads the store."""
        likes = self.likes.get_by_post(post_id)
        comments = self.comments.get_by_post(post_id)
        return Engagement(
            post_id=post_id,
            likes_count=len(likes),
            comments_count=len(comments),
            viewer_has_liked=viewer_id is not None and any(like.user_id == viewer_id for like in likes),
        )

    def summarize(self, post_id: str, viewer_id: str | None) -> Engagement:
        if self.cache is not None and viewer_id is not None:
            hit = self.cache.get(viewer_id, post_id)
            if hit is not None:
                return hit
        summary = self.compute(post_id, viewer_id)
        if self.cache is not None and viewer_id is not None:
            self.cache.put(viewer_id, summary)
        return summary

    def summarize_many(self, post_ids: Iterable[str], viewer_id: str | None) -> list[Engagement]:
        return [self.summarize(post_id, viewer_id) for post_id in post_ids]
