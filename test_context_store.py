"""
Tests for the bounded per-user conversation context cache.
"""

import pytest

from conftest import FakeClock
from context_store import ConversationContextStore
from app_config import SYSTEM_PREAMBLE


def _store(clock=None, **kwargs):
    kwargs.setdefault("max_users", 3)
    kwargs.setdefault("ttl_seconds", 60)
    return ConversationContextStore(clock=clock or FakeClock(0.0), **kwargs)


class TestPreambleAndWindow:

    def test_new_user_starts_with_preamble(self):
        store = _store()
        assert store.history("u1") == [{"role": "system", "content": SYSTEM_PREAMBLE}]

    def test_append_keeps_order(self):
        store = _store()
        store.append("u1", "user", "hi")
        store.append("u1", "assistant", "hello")
        assert [m["role"] for m in store.history("u1")] == ["system", "user", "assistant"]

    def test_recent_returns_last_eight_oldest_first(self):
        store = _store()
        for i in range(10):
            store.append("u1", "user", f"m{i}")
        recent = store.recent("u1")
        assert len(recent) == 8
        assert [m["content"] for m in recent] == [f"m{i}" for i in range(2, 10)]

    def test_short_history_includes_preamble(self):
        store = _store()
        store.append("u1", "user", "hi")
        assert store.recent("u1")[0]["role"] == "system"

    def test_users_are_isolated(self):
        store = _store()
        store.append("u1", "user", "one")
        store.append("u2", "user", "two")
        assert [m["content"] for m in store.history("u1")][1:] == ["one"]
        assert [m["content"] for m in store.history("u2")][1:] == ["two"]

    def test_function_name_kept(self):
        store = _store()
        store.append("u1", "function", "{}", name="lookup")
        assert store.history("u1")[-1] == {"role": "function", "content": "{}", "name": "lookup"}

    def test_unknown_role_rejected(self):
        with pytest.raises(ValueError):
            _store().append("u1", "robot", "beep")

    def test_history_is_a_copy(self):
        store = _store()
        store.history("u1").append({"role": "user", "content": "sneaky"})
        assert len(store.history("u1")) == 1


class TestBounds:

    def test_lru_eviction(self):
        store = _store(max_users=2)
        store.append("u1", "user", "a")
        store.append("u2", "user", "b")
        store.append("u1", "user", "touch")  # u2 is now least recently used
        store.append("u3", "user", "c")

        assert "u1" in store
        assert "u2" not in store
        assert "u3" in store
        assert len(store) == 2

    def test_ttl_expiry_resets_history(self):
        clock = FakeClock(0.0)
        store = _store(clock=clock, ttl_seconds=60)
        store.append("u1", "user", "hello")

        clock.advance(59)
        assert "u1" in store
        store.append("u1", "user", "still here")  # sliding TTL

        clock.advance(61)
        assert "u1" not in store
        assert store.history("u1") == [{"role": "system", "content": SYSTEM_PREAMBLE}]

    def test_expired_users_not_counted(self):
        clock = FakeClock(0.0)
        store = _store(clock=clock, ttl_seconds=10)
        store.append("u1", "user", "a")
        clock.advance(11)
        assert len(store) == 0

    def test_max_messages_keeps_preamble(self):
        store = _store(max_messages=8)
        for i in range(20):
            store.append("u1", "user", f"m{i}")
        history = store.history("u1")
        assert len(history) == 8
        assert history[0]["role"] == "system"
        assert history[-1]["content"] == "m19"

    def test_invalid_limits(self):
        with pytest.raises(ValueError):
            _store(max_users=0)
        with pytest.raises(ValueError):
            _store(max_messages=4, window=8)

    def test_clear(self):
        store = _store()
        store.append("u1", "user", "a")
        store.clear("u1")
        assert "u1" not in store
