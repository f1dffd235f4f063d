"""
Order Store — in-memory persistence for Order entities.

Exposes the small set of document-store operations the command
interpreter relies on: create, find by tracking id, find with
filter/sort/limit, update by id, update by filter, delete by id.
Every operation is atomic on its own (single lock); nothing spans
several operations. Callers get copies, never the stored objects.
"""

import random
import string
import threading
import time
import uuid
from dataclasses import fields, replace
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple
from models import Order

ASCENDING = 1
DESCENDING = -1

_BASE36_ALPHABET = string.digits + string.ascii_lowercase
_ORDER_FIELDS = {f.name for f in fields(Order)}
_IMMUTABLE_FIELDS = {"id", "tracking_id", "created_at"}


def to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36_ALPHABET[remainder])
    return "".join(reversed(digits))


def make_tracking_id(now_ms: Optional[int] = None, rng: Optional[random.Random] = None) -> str:
    """ORD-<base36 ms timestamp><6 random base36 chars>, all upper-case."""
    now_ms = int(time.time() * 1000) if now_ms is None else now_ms
    rng = rng or random
    suffix = "".join(rng.choice(_BASE36_ALPHABET) for _ in range(6))
    return f"ORD-{to_base36(now_ms)}{suffix}".upper()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _copy(order: Order) -> Order:
    return replace(order, metadata=dict(order.metadata))


def _matches(order: Order, filter_: Dict[str, Any]) -> bool:
    for name, expected in filter_.items():
        actual = getattr(order, name)
        if isinstance(expected, (list, tuple, set, frozenset)):
            if actual not in expected:
                return False
        elif actual != expected:
            return False
    return True


def _sort_key(name: str):
    # None sorts before any value, like an ascending document-store sort
    def key(order: Order):
        value = getattr(order, name)
        return (value is not None, value if value is not None else 0)
    return key


class OrderStore:
    """Thread-safe in-memory order collection keyed by internal id."""

    def __init__(self, clock: Callable[[], datetime] = _utcnow):
        self._clock = clock
        self._lock = threading.RLock()
        self._orders: Dict[str, Order] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._orders)

    def _check_fields(self, names) -> None:
        unknown = set(names) - _ORDER_FIELDS
        if unknown:
            raise ValueError(f"Unknown order field(s): {', '.join(sorted(unknown))}")

    # ─────────────────────────────────────────────
    # CREATE / READ
    # ─────────────────────────────────────────────

    def create(self, order: Order) -> Order:
        if not order.tracking_id:
            raise ValueError("Order needs a tracking_id before it can be stored")
        with self._lock:
            now = self._clock()
            stored = replace(
                order,
                id=uuid.uuid4().hex,
                metadata=dict(order.metadata),
                created_at=now,
                updated_at=now,
            )
            self._orders[stored.id] = stored
            return _copy(stored)

    def get(self, order_id: str) -> Optional[Order]:
        with self._lock:
            order = self._orders.get(order_id)
            return _copy(order) if order else None

    def find_by_tracking_id(self, tracking_id: str) -> Optional[Order]:
        matches = self.find({"tracking_id": tracking_id}, limit=1)
        return matches[0] if matches else None

    def find(
        self,
        filter_: Optional[Dict[str, Any]] = None,
        sort: Sequence[Tuple[str, int]] = (),
        limit: Optional[int] = None,
    ) -> List[Order]:
        """
        Orders matching every field in *filter_* (list/tuple/set values mean
        "one of"), ordered by *sort* [(field, ASCENDING|DESCENDING), ...],
        truncated to *limit*. Without a sort, insertion order is kept.
        """
        filter_ = filter_ or {}
        self._check_fields(filter_)
        self._check_fields(name for name, _ in sort)

        with self._lock:
            result = [o for o in self._orders.values() if _matches(o, filter_)]

        # Stable sorts applied from the least significant key up
        for name, direction in reversed(list(sort)):
            result.sort(key=_sort_key(name), reverse=direction == DESCENDING)

        if limit is not None:
            result = result[:limit]
        return [_copy(o) for o in result]

    # ─────────────────────────────────────────────
    # UPDATE / DELETE
    # ─────────────────────────────────────────────

    def update_by_id(self, order_id: str, updates: Dict[str, Any]) -> Optional[Order]:
        """Apply *updates* and return the updated order, or None if the id is unknown."""
        self._check_fields(updates)
        frozen = _IMMUTABLE_FIELDS & set(updates)
        if frozen:
            raise ValueError(f"Field(s) cannot be updated: {', '.join(sorted(frozen))}")

        with self._lock:
            current = self._orders.get(order_id)
            if current is None:
                return None
            if "metadata" in updates:
                updates = {**updates, "metadata": dict(updates["metadata"])}
            updated = replace(current, **updates, updated_at=self._clock())
            self._orders[order_id] = updated
            return _copy(updated)

    def update_one(self, filter_: Dict[str, Any], updates: Dict[str, Any]) -> Optional[Order]:
        """Update the first order matching *filter_*; returns it, or None when nothing matched."""
        with self._lock:
            matches = self.find(filter_, limit=1)
            if not matches:
                return None
            return self.update_by_id(matches[0].id, updates)

    def delete_by_id(self, order_id: str) -> bool:
        with self._lock:
            return self._orders.pop(order_id, None) is not None
