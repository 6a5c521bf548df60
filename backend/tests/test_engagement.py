import uuid

from app.repositories.comment_repo import CommentRepository
from app.repositories.like_repo import LikeRepository
from app.services.engagement import Engagement, EngagementAggregator, EngagementCache
from app.services.events import StateEvent, StateEvents, Topic

def uid():
    return uuid.uuid4().hex[:10]

def test_counts_match_rows(db):
    likes, comments = LikeRepository(db), CommentRepository(db)
    post_id, viewer, other = uid(), uid(), uid()
    likes.add(post_id, other)
    likes.add(post_id, viewer)
    likes.add(uid(), viewer)  # different post
    comments.add(post_id, other, "strong")

    s = EngagementAggregator(db).summarize(post_id, viewer)
    assert s == Engagement(post_id=post_id, likes_count=2, comments_count=1, viewer_has_liked=True)

def test_viewer_has_liked_false_without_row(db):
    likes = LikeRepository(db)
    post_id = uid()
    likes.add(post_id, uid())
    s = EngagementAggregator(db).summarize(post_id, uid())
    assert s.likes_count == 1
    assert s.viewer_has_liked is False

def test_anonymous_viewer(db):
    post_id = uid()
    LikeRepository(db).add(post_id, uid())
    assert EngagementAggregator(db).summarize(post_id, None).viewer_has_liked is False

def test_summarize_many_keeps_order(db):
    ids = [uid(), uid(), uid()]
    LikeRepository(db).add(ids[1], uid())
    result = EngagementAggregator(db).summarize_many(ids, uid())
    assert [s.post_id for s in result] == ids
    assert [s.likes_count for s in result] == [0, 1, 0]

def test_cache_hit_skips_store(db):
    cache = EngagementCache()
    agg = EngagementAggregator(db, cache)
    post_id, viewer = uid(), uid()
    assert agg.summarize(post_id, viewer).likes_count == 0

    # someone else likes it; the cached value is served unchanged
    LikeRepository(db).add(post_id, uid())
    assert agg.summarize(post_id, viewer).likes_count == 0
    assert agg.compute(post_id, viewer).likes_count == 1

def test_cache_overwritten_by_own_like_event(db):
    events = StateEvents()
    cache = EngagementCache(events)
    agg = EngagementAggregator(db, cache)
    post_id, viewer = uid(), uid()
    agg.summarize(post_id, viewer)

    LikeRepository(db).add(post_id, viewer)
    fresh = agg.compute(post_id, viewer)
    events.publish(StateEvent(Topic.LIKES, viewer, post_id=post_id, data={"engagement": fresh}))

    cached = agg.summarize(post_id, viewer)
    assert cached.likes_count == 1
    assert cached.viewer_has_liked is True

def test_cache_is_per_viewer(db):
    cache = EngagementCache()
    cache.put("a", Engagement("p", 3, 0, True))
    assert cache.get("a", "p").viewer_has_liked is True
    assert cache.get("b", "p") is None
    assert len(cache) == 1
