"""Process-wide resolution cache.

Maps a :class:`ResolutionKey` to the :class:`ResolvedView` built for it. A key
is resolved at most once; later requests get the identical instance without
touching the registry, detector or adapter. Failed resolutions are not stored.
"""

import threading
from collections.abc import Callable
from typing import Any

from tenantviews.registry.base import ResolutionKey
from tenantviews.utils.logger import get_logger

from .types import ResolvedView

logger = get_logger("resolver")


class ResolutionCache:
    """Thread-safe memo of resolved views with hit/miss counters."""

    def __init__(self):
        self._entries: dict[ResolutionKey, ResolvedView] = {}
        self._lock = threading.RLock()
        self._hits = 0
        self._misses = 0

    def get(self, key: ResolutionKey) -> ResolvedView | None:
        with self._lock:
            return self._entries.get(key)

    def get_or_resolve(self, key: ResolutionKey, pipeline: Callable[[], ResolvedView]) -> ResolvedView:
        """Return the cached view for ``key``, running ``pipeline`` on a miss.

        The lock is held while the pipeline runs, so the pipeline executes at
        most once per key. Exceptions from the pipeline propagate and leave
        the cache unchanged.
        """
        with self._lock:
            cached = self._entries.get(key)
            if cached is not None:
                self._hits += 1
                logger.debug(f"Cache hit for {key}")
                return cached

            self._misses += 1
            logger.debug(f"Cache miss for {key}")
            resolved = pipeline()
            self._entries[key] = resolved
            return resolved

    def invalidate(self, key: ResolutionKey) -> bool:
        """Drop one key. Returns whether it was present."""
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0

    def keys(self) -> list[ResolutionKey]:
        with self._lock:
            return list(self._entries)

    def get_stats(self) -> dict[str, Any]:
        with self._lock:
            return {"entries": len(self._entries), "hits": self._hits, "misses": self._misses}

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
