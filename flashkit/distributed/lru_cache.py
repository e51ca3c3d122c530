"""A bounded least-recently-used cache and a helper to build cache keys."""

from __future__ import annotations

from collections import OrderedDict
from typing import Any, Generic, Hashable, Optional, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class LRUCache(Generic[K, V]):
    """Holds at most ``capacity`` values, evicting the least recently used."""

    def __init__(self, capacity: int):
        if capacity <= 0:
            raise ValueError("LRUCache capacity must be positive")
        self._capacity = capacity
        self._items: "OrderedDict[K, V]" = OrderedDict()

    def put(self, key: K, value: V) -> V:
        """Store ``value`` under ``key`` as the most recent entry and return it."""
        if key in self._items:
            del self._items[key]
        elif len(self._items) >= self._capacity:
            self._items.popitem(last=False)
        self._items[key] = value
        return value

    def get(self, key: K) -> Optional[V]:
        """Return the value for ``key`` (marking it most recent), or None."""
        if key not in self._items:
            return None
        self._items.move_to_end(key)
        return self._items[key]

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, key: object) -> bool:
        return key in self._items


def make_hash_key(obj: Any, *args: Any) -> str:
    """Build a key from the object's type and identity followed by ``args``."""
    parts = [type(obj).__qualname__, str(id(obj))]
    parts.extend(str(arg) for arg in args)
    return " ".join(parts)