import dataclasses

import pytest

from app.services.events import StateEvent, StateEvents, Topic

def test_publish_reaches_topic_subscribers_only():
    events = StateEvents()
    posts, follows = [], []
    events.subscribe(Topic.POSTS, posts.append)
    events.subscribe(Topic.FOLLOWING, follows.append)

    assert events.publish(StateEvent(Topic.POSTS, "u1", post_id="p1")) == 1
    assert [e.post_id for e in posts] == ["p1"]
    assert follows == []

def test_unsubscribe():
    events = StateEvents()
    got = []
    events.subscribe(Topic.LIKES, got.append)
    events.unsubscribe(Topic.LIKES, got.append)
    events.unsubscribe(Topic.LIKES, got.append)  # already gone
    assert events.publish(StateEvent(Topic.LIKES, "u1")) == 0
    assert got == []

def test_failing_subscriber_does_not_stop_delivery():
    events = StateEvents()
    got = []
    def broken(event):
        raise RuntimeError("boom")
    events.subscribe(Topic.COMMENTS, broken)
    events.subscribe(Topic.COMMENTS, got.append)
    assert events.publish(StateEvent(Topic.COMMENTS, "u1")) == 2
    assert len(got) == 1

def test_events_are_immutable_and_utc():
    event = StateEvent(Topic.PROFILE, "u1")
    assert event.timestamp.tzinfo is not None
    assert event.timestamp.utcoffset().total_seconds() == 0
    with pytest.raises(dataclasses.FrozenInstanceError):
        event.user_id = "u2"
