"""
Keyed query cache with invalidation-on-mutation.

Views read through the cache; services drop or replace entries after a
successful mutation so the next read goes back to the server. One cache is
created per user session and passed to the services that need it.

Keys are tuples: entity name, "list"/"detail" discriminator, then parameters.
Invalidation by prefix removes every key that starts with the prefix, e.g.
``("roles", "list")`` drops all role pages regardless of filters.
"""

import logging
import threading
import time
from typing import Any, Callable, Hashable, Optional, Tuple, TypeVar

import cachetools

logger = logging.getLogger(__name__)

CacheKey = Tuple[Hashable, ...]
T = TypeVar("T")

_MISSING = object()


def list_key(entity: str, **params: Any) -> CacheKey:
    """
    Key for a list query.

    Parameters are sorted and empty values dropped so that equivalent
    filter combinations share a key and different ones never collide.
    """
    normalized = tuple(sorted((k, v) for k, v in params.items() if v is not None and v != ""))
    return (entity, "list", normalized)


def detail_key(entity: str, id: Any, *sub: Hashable) -> CacheKey:
    """
    Key for one entity, optionally a nested resource (e.g. "versions").

    Ids are compared as strings: URL parameters arrive as text while the
    server returns numbers.
    """
    return (entity, "detail", str(id), *sub)


class QueryCache:
    """
    Thread-safe keyed store on top of a cachetools TTLCache.

    Loader failures are never cached; the exception reaches the caller.
    """

    def __init__(
        self,
        ttl_seconds: Optional[float] = None,
        max_entries: int = 256,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Args:
            ttl_seconds: Age after which an entry is refetched; None keeps entries
                until invalidated or evicted
            max_entries: Entries kept before the least recently used is evicted
            clock: Time source, injectable for tests
        """
        self.ttl_seconds = ttl_seconds
        if ttl_seconds is None:
            self._entries = cachetools.LRUCache(maxsize=max_entries)
        else:
            self._entries = cachetools.TTLCache(maxsize=max_entries, ttl=ttl_seconds, timer=clock)
        self._lock = threading.RLock()

    @property
    def max_entries(self) -> int:
        return int(self._entries.maxsize)

    def fetch(self, key: CacheKey, loader: Callable[[], T]) -> T:
        """Return the cached value for key, loading and storing it if missing or stale."""
        with self._lock:
            value = self._entries.get(key, _MISSING)
        if value is not _MISSING:
            return value

        logger.debug("cache miss %s", key)
        value = loader()
        self.set(key, value)
        return value

    def get(self, key: CacheKey) -> Optional[Any]:
        with self._lock:
            return self._entries.get(key)

    def set(self, key: CacheKey, value: Any) -> None:
        with self._lock:
            self._entries[key] = value

    def remove(self, key: CacheKey) -> bool:
        """Drop exactly one key. Returns True if it was present."""
        with self._lock:
            return self._entries.pop(key, _MISSING) is not _MISSING

    def invalidate(self, prefix: CacheKey) -> int:
        """Drop every key starting with prefix. Returns the number removed."""
        n = len(prefix)
        with self._lock:
            doomed = [key for key in list(self._entries.keys()) if key[:n] == tuple(prefix)]
            for key in doomed:
                self._entries.pop(key, None)
        if doomed:
            logger.debug("invalidated %d entries under %s", len(doomed), prefix)
        return len(doomed)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, key: CacheKey) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
