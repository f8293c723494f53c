"""Read-mostly configuration cache with explicit invalidation.

Entries live in an immutable mapping that is replaced wholesale on every
write, so readers never observe a partially updated cache. The lock guards
only the swap and is never held while a loader runs. A generation counter
drops loads that raced an :meth:`SnapshotCache.invalidate` call, so a value
read before an admin update can never be stored after it.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Hashable, Mapping
from types import MappingProxyType
from typing import Generic, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class SnapshotCache(Generic[K, V]):
    """Thread-safe copy-on-write cache owned by a single evaluator or engine."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: Mapping[K, V] = MappingProxyType({})
        self._generation = 0

    def get_or_load(self, key: K, loader: Callable[[], V | None]) -> V | None:
        """Return the cached value for ``key``, loading it on a miss.

        ``None`` results are returned but not cached.
        """
        entries = self._entries
        if key in entries:
            return entries[key]

        with self._lock:
            generation = self._generation

        value = loader()
        if value is None:
            return None

        with self._lock:
            if self._generation == generation:
                updated = dict(self._entries)
                updated[key] = value
                self._entries = MappingProxyType(updated)
        return value

    def invalidate(self) -> None:
        """Drop every cached entry."""
        with self._lock:
            self._generation += 1
            self._entries = MappingProxyType({})

    @property
    def generation(self) -> int:
        return self._generation

    def __len__(self) -> int:
        return len(self._entries)
