"""
Cache management system for Storefront API responses.

Responses are stored per request key together with the cache tags they
belong to. Each tag carries an epoch counter; invalidating a tag bumps its
epoch, which turns every entry stored under the previous epoch stale.

Callers snapshot the epochs before fetching and store the response under
that snapshot, so a response fetched across an invalidation is never kept.
"""

import json
import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

TagEpochs = Tuple[Tuple[str, int], ...]

DEFAULT_MAX_ENTRIES = 1000


class CacheTag(str, Enum):
    """Invalidation groups for cached Storefront responses."""

    COLLECTIONS = "collections"
    PRODUCTS = "products"
    CART = "cart"


@dataclass(frozen=True)
class CacheEntry:
    """A cached response body and the tag epochs it was fetched under."""

    data: Any
    tag_epochs: TagEpochs
    created_at: float = field(default_factory=time.time)
    expires_at: Optional[float] = None


def make_cache_key(query: str, variables: Optional[Mapping[str, Any]] = None) -> str:
    """
    Build a stable cache key from a GraphQL document and its variables.

    Args:
        query: GraphQL document
        variables: Query variables

    Returns:
        str: Cache key
    """
    return json.dumps({"query": query, "variables": variables or {}}, sort_keys=True, default=str)


def _tag_value(tag) -> str:
    return tag.value if isinstance(tag, CacheTag) else str(tag)


class CacheTagStore:
    """
    Process-wide LRU store of tagged responses.

    Every read, write and invalidation runs under a single lock, so a lookup
    sees either the state before an invalidation or the state after it.
    """

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES, ttl_seconds: Optional[float] = None):
        """
        Args:
            max_entries: Entries kept before the least recently used is evicted
            ttl_seconds: Lifetime of an entry (None keeps it until invalidated or evicted)
        """
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")

        self.max_entries = max_entries
        self.ttl_seconds = ttl_seconds

        self._lock = threading.Lock()
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self._epochs: Dict[str, int] = {}
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def _snapshot(self, tags: Iterable) -> TagEpochs:
        names = {_tag_value(tag) for tag in tags}
        return tuple(sorted((name, self._epochs.get(name, 0)) for name in names))

    def _is_current(self, tag_epochs: TagEpochs) -> bool:
        return all(self._epochs.get(tag, 0) == epoch for tag, epoch in tag_epochs)

    def current_epochs(self, tags: Iterable) -> TagEpochs:
        """
        Snapshot the epoch of each tag.

        Take it before fetching and hand it to ``set``; if any tag is
        invalidated in between, the fetched data is not stored.
        """
        with self._lock:
            return self._snapshot(tags)

    def get(self, key: str) -> Optional[Any]:
        """
        Retrieve cached data by key.

        Args:
            key: Cache key

        Returns:
            Cached data or None if missing, expired or invalidated
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return None

            expired = entry.expires_at is not None and time.time() > entry.expires_at
            if expired or not self._is_current(entry.tag_epochs):
                del self._entries[key]
                self._misses += 1
                return None

            self._entries.move_to_end(key)
            self._hits += 1
            return entry.data

    def set(self, key: str, data: Any, tags: Iterable = (), tag_epochs: Optional[TagEpochs] = None) -> bool:
        """
        Store data under the epochs its fetch started with.

        Args:
            key: Cache key
            data: Data to cache
            tags: Cache tags the data belongs to (used when no snapshot is given)
            tag_epochs: Snapshot from ``current_epochs`` taken before the fetch

        Returns:
            bool: False when a tag was invalidated since the snapshot
        """
        with self._lock:
            if tag_epochs is None:
                tag_epochs = self._snapshot(tags)
            elif not self._is_current(tag_epochs):
                self._entries.pop(key, None)
                logger.debug("Discarding response fetched before a tag invalidation")
                return False

            expires_at = time.time() + self.ttl_seconds if self.ttl_seconds else None
            self._entries[key] = CacheEntry(data=data, tag_epochs=tag_epochs, expires_at=expires_at)
            self._entries.move_to_end(key)

            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)
                self._evictions += 1

            return True

    def invalidate_tag(self, tag) -> int:
        """
        Mark every entry stored under a tag as stale and drop it.

        Args:
            tag: Cache tag to invalidate

        Returns:
            int: New epoch of the tag
        """
        name = _tag_value(tag)
        with self._lock:
            epoch = self._epochs.get(name, 0) + 1
            self._epochs[name] = epoch

            stale_keys = [
                key for key, entry in self._entries.items() if any(tag == name for tag, _ in entry.tag_epochs)
            ]
            for key in stale_keys:
                del self._entries[key]

        logger.info(f"Invalidated cache tag '{name}' (epoch {epoch}, {len(stale_keys)} entries dropped)")
        return epoch

    def get_epoch(self, tag) -> int:
        with self._lock:
            return self._epochs.get(_tag_value(tag), 0)

    def clear(self) -> None:
        """Clear all cached data."""
        with self._lock:
            initial_count = len(self._entries)
            self._entries.clear()

        logger.info(f"Cleared all cache data ({initial_count} entries)")

    def get_stats(self) -> Dict[str, Any]:
        """
        Get cache statistics.

        Returns:
            Dict: Cache statistics
        """
        with self._lock:
            return {
                "total_keys": len(self._entries),
                "max_entries": self.max_entries,
                "ttl_seconds": self.ttl_seconds,
                "hits": self._hits,
                "misses": self._misses,
                "evictions": self._evictions,
                "tag_epochs": dict(self._epochs),
            }


def create_cache_store(settings) -> CacheTagStore:
    """Build a store bounded by CACHE_MAX_ENTRIES and CACHE_TTL_SECONDS."""
    return CacheTagStore(max_entries=settings.CACHE_MAX_ENTRIES, ttl_seconds=settings.CACHE_TTL_SECONDS)
