"""
TEST DOC: Conversation Store

WHAT: Tests for InMemoryConversationStore and its eviction policies.
WHY: The store is the only shared state; sessions must never leak into each other.
HOW: Exercise get/put/delete directly, drive eviction with a fake clock,
     and hammer the store from threads.

CASES:
- Unknown sessions read as empty transcripts
- put replaces the whole transcript
- delete forgets a session
- LRU capacity eviction
- Idle TTL expiry

EDGE CASES:
- get on an unknown key does not create an entry
- Stored transcripts cannot be mutated through the caller's list
- Concurrent writers on distinct sessions
- Concurrent writers on the same session (last writer wins, no corruption)
"""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from ai_adventure.models import model_turn, user_turn
from ai_adventure.store import (
    InMemoryConversationStore,
    LRUEviction,
    NoEviction,
    eviction_from_limits,
)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class TestInMemoryConversationStore:
    """Basic store behavior."""

    def test_unknown_session_is_empty(self, store):
        """get on an unseen id returns an empty transcript."""
        assert store.get("never-seen") == ()

    def test_get_does_not_create(self, store):
        """Reading an unknown session leaves the store empty."""
        store.get("never-seen")
        assert len(store) == 0
        assert "never-seen" not in store

    def test_put_then_get(self, store):
        """A stored transcript reads back in order."""
        turns = [user_turn("start"), model_turn("You wake up...")]
        store.put("s1", turns)
        assert store.get("s1") == tuple(turns)
        assert "s1" in store

    def test_put_replaces(self, store):
        """put overwrites rather than appends."""
        store.put("s1", [user_turn("a"), model_turn("b")])
        store.put("s1", [user_turn("c")])
        assert store.get("s1") == (user_turn("c"),)

    def test_caller_list_is_copied(self, store):
        """Mutating the list passed to put does not change the stored transcript."""
        turns = [user_turn("start")]
        store.put("s1", turns)
        turns.append(model_turn("sneaky"))
        assert len(store.get("s1")) == 1

    def test_returned_transcript_is_immutable(self, store):
        """get hands out a tuple."""
        store.put("s1", [user_turn("start")])
        assert isinstance(store.get("s1"), tuple)

    def test_sessions_are_independent(self, store):
        """Writing one session leaves another untouched."""
        store.put("a", [user_turn("for a")])
        store.put("b", [user_turn("for b")])
        assert store.get("a") == (user_turn("for a"),)
        assert store.get("b") == (user_turn("for b"),)

    def test_delete(self, store):
        """delete forgets the session and reports whether it existed."""
        store.put("s1", [user_turn("start")])
        assert store.delete("s1") is True
        assert store.get("s1") == ()
        assert store.delete("s1") is False

    def test_default_policy_keeps_everything(self):
        """Without a policy nothing is ever evicted."""
        store = InMemoryConversationStore()
        for i in range(500):
            store.put(f"s{i}", [user_turn(str(i))])
        assert len(store) == 500


class TestLRUEviction:
    """Capacity and idle-time eviction."""

    def test_capacity_evicts_least_recently_used(self):
        """Beyond max_sessions the oldest session goes first."""
        store = InMemoryConversationStore(LRUEviction(max_sessions=2))
        store.put("a", [user_turn("a")])
        store.put("b", [user_turn("b")])
        store.put("c", [user_turn("c")])
        assert "a" not in store
        assert "b" in store
        assert "c" in store

    def test_get_refreshes_recency(self):
        """Reading a session protects it from capacity eviction."""
        store = InMemoryConversationStore(LRUEviction(max_sessions=2))
        store.put("a", [user_turn("a")])
        store.put("b", [user_turn("b")])
        store.get("a")
        store.put("c", [user_turn("c")])
        assert "a" in store
        assert "b" not in store

    def test_ttl_expiry_on_get(self):
        """An idle session reads as empty once its TTL passes."""
        clock = FakeClock()
        store = InMemoryConversationStore(LRUEviction(ttl_seconds=60, clock=clock))
        store.put("s1", [user_turn("start")])
        clock.advance(59)
        assert store.get("s1") != ()
        clock.advance(61)
        assert store.get("s1") == ()
        assert len(store) == 0

    def test_access_extends_ttl(self):
        """Each read resets the idle timer."""
        clock = FakeClock()
        store = InMemoryConversationStore(LRUEviction(ttl_seconds=60, clock=clock))
        store.put("s1", [user_turn("start")])
        for _ in range(5):
            clock.advance(50)
            assert store.get("s1") != ()

    def test_purge_expired(self):
        """purge_expired drops only idle sessions."""
        clock = FakeClock()
        store = InMemoryConversationStore(LRUEviction(ttl_seconds=10, clock=clock))
        store.put("old", [user_turn("old")])
        clock.advance(20)
        store.put("fresh", [user_turn("fresh")])
        assert store.purge_expired() == 0  # put already dropped "old"
        assert "old" not in store
        assert "fresh" in store

    def test_len_ignores_expired(self):
        """Expired sessions are not counted."""
        clock = FakeClock()
        store = InMemoryConversationStore(LRUEviction(ttl_seconds=10, clock=clock))
        store.put("a", [user_turn("a")])
        store.put("b", [user_turn("b")])
        clock.advance(11)
        assert len(store) == 0

    @pytest.mark.parametrize(
        "kwargs",
        [{"max_sessions": 0}, {"ttl_seconds": 0}, {"ttl_seconds": -1.0}],
    )
    def test_invalid_limits(self, kwargs):
        """Non-positive limits are rejected."""
        with pytest.raises(ValueError):
            LRUEviction(**kwargs)

    def test_eviction_from_limits(self):
        """No limits means no eviction; any limit means LRU."""
        assert isinstance(eviction_from_limits(None, None), NoEviction)
        policy = eviction_from_limits(10, None)
        assert isinstance(policy, LRUEviction)
        assert policy.max_sessions == 10
        assert policy.ttl_seconds is None


class TestConcurrency:
    """Thread-safety of the store."""

    def test_distinct_sessions_from_threads(self, store):
        """Parallel writers on different sessions never see each other's turns."""

        def play(session: int) -> None:
            sid = f"s{session}"
            for step in range(50):
                current = store.get(sid)
                store.put(sid, (*current, user_turn(f"{sid}-{step}")))

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(play, range(16)))

        for session in range(16):
            sid = f"s{session}"
            transcript = store.get(sid)
            assert [t.text for t in transcript] == [f"{sid}-{step}" for step in range(50)]

    def test_same_session_last_writer_wins(self, store):
        """Racing writers on one session leave one writer's complete transcript."""
        barrier = threading.Barrier(8)

        def write(writer: int) -> None:
            barrier.wait()
            store.put("shared", [user_turn(f"w{writer}")] * 10)

        threads = [threading.Thread(target=write, args=(i,)) for i in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        transcript = store.get("shared")
        assert len(transcript) == 10
        assert len({t.text for t in transcript}) == 1
