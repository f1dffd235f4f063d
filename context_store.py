"""
Conversation Context Store

Per-user message history feeding the free-text LLM fallback:
- first message for a new user is always the system preamble
- LRU eviction once more than max_users users are tracked
- sliding TTL: a user idle for ttl_seconds starts over
- per-user history capped at max_messages (preamble kept)
- only the last `window` messages are ever forwarded to a model
"""

import threading
import time
from collections import OrderedDict
from typing import Callable, Dict, List, Optional
from app_config import (
    SYSTEM_PREAMBLE,
    CONTEXT_WINDOW,
    CONTEXT_MAX_USERS,
    CONTEXT_TTL_SECONDS,
    CONTEXT_MAX_MESSAGES,
)

ROLES = ("system", "user", "assistant", "function")


class ConversationContextStore:
    """Thread-safe LRU + TTL cache of user id → message list."""

    def __init__(
        self,
        max_users: int = CONTEXT_MAX_USERS,
        ttl_seconds: float = CONTEXT_TTL_SECONDS,
        window: int = CONTEXT_WINDOW,
        max_messages: int = CONTEXT_MAX_MESSAGES,
        preamble: str = SYSTEM_PREAMBLE,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_users < 1:
            raise ValueError("max_users must be at least 1")
        if max_messages < window:
            raise ValueError("max_messages must be >= window")
        self.max_users = max_users
        self.ttl_seconds = ttl_seconds
        self.window = window
        self.max_messages = max_messages
        self.preamble = preamble
        self._clock = clock
        self._lock = threading.RLock()
        # user_id -> {"messages": [...], "expires_at": float}, oldest touch first
        self._items: "OrderedDict[str, Dict]" = OrderedDict()

    def __len__(self) -> int:
        with self._lock:
            self._purge_expired_unlocked()
            return len(self._items)

    def __contains__(self, user_id: str) -> bool:
        with self._lock:
            item = self._items.get(user_id)
            return item is not None and item["expires_at"] > self._clock()

    # ─────────────────────────────────────────────
    # INTERNAL (call with the lock held)
    # ─────────────────────────────────────────────

    def _purge_expired_unlocked(self) -> None:
        now = self._clock()
        expired = [uid for uid, item in self._items.items() if item["expires_at"] <= now]
        for uid in expired:
            del self._items[uid]

    def _get_or_create_unlocked(self, user_id: str) -> List[Dict]:
        now = self._clock()
        item = self._items.get(user_id)

        if item is not None and item["expires_at"] <= now:
            del self._items[user_id]
            item = None

        if item is None:
            item = {"messages": [{"role": "system", "content": self.preamble}]}
            self._items[user_id] = item
            while len(self._items) > self.max_users:
                self._items.popitem(last=False)

        item["expires_at"] = now + self.ttl_seconds
        self._items.move_to_end(user_id)
        return item["messages"]

    # ─────────────────────────────────────────────
    # PUBLIC API
    # ─────────────────────────────────────────────

    def append(self, user_id: str, role: str, content: str, name: Optional[str] = None) -> None:
        if role not in ROLES:
            raise ValueError(f"Unsupported message role: {role}")
        message = {"role": role, "content": content}
        if name:
            message["name"] = name

        with self._lock:
            messages = self._get_or_create_unlocked(user_id)
            messages.append(message)
            overflow = len(messages) - self.max_messages
            if overflow > 0:
                # keep the preamble at index 0
                del messages[1:1 + overflow]

    def history(self, user_id: str) -> List[Dict]:
        """Full stored history (copy). Creates the context if missing."""
        with self._lock:
            return [dict(m) for m in self._get_or_create_unlocked(user_id)]

    def recent(self, user_id: str, limit: Optional[int] = None) -> List[Dict]:
        """Last *limit* (default: window) messages, oldest first."""
        limit = self.window if limit is None else limit
        with self._lock:
            messages = self._get_or_create_unlocked(user_id)
            return [dict(m) for m in messages[-limit:]] if limit > 0 else []

    def clear(self, user_id: str) -> None:
        with self._lock:
            self._items.pop(user_id, None)
