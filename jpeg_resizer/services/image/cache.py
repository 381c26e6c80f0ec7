"""Bounded in-memory cache for resized images.

Provides a process-local LRU store keyed by fingerprint:
- Fixed capacity set at construction
- Least-recently-used eviction on overflow
- Lock-protected so request handlers and worker threads can share it
"""

import logging
import threading
from collections import OrderedDict
from typing import Any

logger = logging.getLogger(__name__)


class BoundedCache:
    """
    Thread-safe LRU cache mapping fingerprints to encoded JPEG bytes.

    Recency is refreshed by ``get`` and ``put``; ``contains`` is a pure
    membership probe and leaves the eviction order untouched.
    """

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError(f"Cache capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._entries: OrderedDict[str, bytes] = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def contains(self, key: str) -> bool:
        """Check whether ``key`` is cached without refreshing its recency."""
        with self._lock:
            return key in self._entries

    def get(self, key: str) -> bytes | None:
        """
        Look up a cached image.

        Args:
            key: Fingerprint

        Returns:
            Cached bytes, or None if absent
        """
        with self._lock:
            data = self._entries.get(key)
            if data is None:
                self._misses += 1
                return None
            self._entries.move_to_end(key)
            self._hits += 1
            return data

    def put(self, key: str, data: bytes) -> None:
        """
        Store an image, evicting the least recently used entry when full.

        Overwriting an existing key replaces the bytes and refreshes recency.
        """
        with self._lock:
            self._entries[key] = data
            self._entries.move_to_end(key)

            while len(self._entries) > self._capacity:
                evicted, _ = self._entries.popitem(last=False)
                self._evictions += 1
                logger.debug(f"Cache evicted {evicted}")

            size = len(self._entries)

        logger.debug(f"Cache put {key} ({size}/{self._capacity})")

    def clear(self) -> int:
        """Drop all entries. Returns count cleared."""
        with self._lock:
            count = len(self._entries)
            self._entries.clear()

        logger.info(f"Cleared {count} cached images")
        return count

    def get_stats(self) -> dict[str, Any]:
        """Get cache statistics."""
        with self._lock:
            total_bytes = sum(len(data) for data in self._entries.values())
            return {
                "entries": len(self._entries),
                "capacity": self._capacity,
                "total_bytes": total_bytes,
                "hits": self._hits,
                "misses": self._misses,
                "evictions": self._evictions,
            }
