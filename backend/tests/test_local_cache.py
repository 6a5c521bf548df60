import json

from app.services.events import StateEvent, StateEvents, Topic
from app.services.local_cache import LocalCache, cache_key

class Clock:
    def __init__(self, t=1000.0):
        self.t = t
    def __call__(self):
        return self.t

class Loader:
    def __init__(self, value):
        self.value = value
        self.calls = 0
    def __call__(self):
        self.calls += 1
        return self.value

def test_key_convention():
    assert cache_key("customExercises", "u1") == "musclegram_customExercises_u1"

def test_read_through_until_ttl():
    clock = Clock()
    cache = LocalCache(ttl_seconds=60, clock=clock)
    load = Loader(["Bench Press"])

    assert cache.get_or_load("customExercises", "u1", load) == ["Bench Press"]
    assert cache.get_or_load("customExercises", "u1", load) == ["Bench Press"]
    assert load.calls == 1

    clock.t += 61
    cache.get_or_load("customExercises", "u1", load)
    assert load.calls == 2

def test_event_marks_entry_stale():
    events = StateEvents()
    cache = LocalCache(ttl_seconds=60, events=events, clock=Clock())
    load = Loader([])
    cache.get_or_load("workoutExercises", "u1", load)

    events.publish(StateEvent(Topic.POSTS, "u1", post_id="p1"))
    assert cache.peek("workoutExercises", "u1").stale is True

    cache.get_or_load("workoutExercises", "u1", load)
    assert load.calls == 2
    assert cache.peek("workoutExercises", "u1").stale is False

def test_events_for_other_users_or_subjects_ignored():
    events = StateEvents()
    cache = LocalCache(ttl_seconds=60, events=events, clock=Clock())
    cache.put("workoutExercises", "u1", [])
    events.publish(StateEvent(Topic.POSTS, "u2"))
    events.publish(StateEvent(Topic.CUSTOM_EXERCISES, "u1"))
    assert cache.peek("workoutExercises", "u1").stale is False

def test_invalidate_missing_entry():
    assert LocalCache().invalidate("customExercises", "nobody") is False

def test_persists_and_reloads(tmp_path):
    clock = Clock()
    first = LocalCache(ttl_seconds=60, directory=tmp_path, clock=clock)
    first.put("customExercises", "u1", [["chest", "Cable Fly"]])
    with open(tmp_path / "musclegram_customExercises_u1.json") as f:
        assert json.load(f)["value"] == [["chest", "Cable Fly"]]

    second = LocalCache(ttl_seconds=60, directory=tmp_path, clock=clock)
    load = Loader([])
    assert second.get_or_load("customExercises", "u1", load) == [["chest", "Cable Fly"]]
    assert load.calls == 0

def test_unreadable_file_ignored(tmp_path):
    (tmp_path / "musclegram_customExercises_u1.json").write_text("{not json")
    cache = LocalCache(directory=tmp_path)
    assert cache.peek("customExercises", "u1") is None

def test_write_during_load_is_not_served_fresh():
    events = StateEvents()
    cache = LocalCache(ttl_seconds=60, events=events, clock=Clock())
    store = []

    def racing_load():
        snapshot = list(store)
        # a post lands after the snapshot was taken
        store.append("p1")
        events.publish(StateEvent(Topic.POSTS, "u1", post_id="p1"))
        return snapshot

    assert cache.get_or_load("workoutExercises", "u1", racing_load) == []
    assert cache.peek("workoutExercises", "u1").stale is True
    assert cache.get_or_load("workoutExercises", "u1", lambda: list(store)) == ["p1"]
    assert cache.peek("workoutExercises", "u1").stale is False

def test_load_for_other_user_unaffected_by_invalidation():
    events = StateEvents()
    cache = LocalCache(ttl_seconds=60, events=events, clock=Clock())

    def load():
        events.publish(StateEvent(Topic.POSTS, "u2"))
        return []

    cache.get_or_load("workoutExercises", "u1", load)
    assert cache.peek("workoutExercises", "u1").stale is False
