"""Query cache shared by the feature services.

Reads are cached under tuple keys such as ``("students", status, route)``.
Entries are kept per scope (the session token in the web app), so a read made
with one user's token is never served to another user. Writes drop every key
that starts with one of the prefixes they declare, in every scope, so a
student update invalidates all cached student lists and detail lookups.
"""
from __future__ import annotations

import logging
import threading
import time
from functools import wraps
from typing import Any, Callable, Dict, Hashable, Optional, Tuple, Union

from ..core.constants import DEFAULT_CACHE_TTL_SECONDS

logger = logging.getLogger(__name__)

Key = Tuple[Hashable, ...]
Prefix = Union[str, Key]


def _as_key(prefix: Prefix) -> Key:
    if isinstance(prefix, tuple):
        return prefix
    return (prefix,)


class QueryCache:
    def __init__(
        self,
        ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS,
        *,
        clock: Callable[[], float] = time.monotonic,
        scope: Optional[Callable[[], Hashable]] = None,
    ):
        self._ttl = float(ttl_seconds)
        self._clock = clock
        self._scope = scope or (lambda: None)
        self._entries: Dict[Tuple[Hashable, Key], Tuple[float, Any]] = {}
        self._lock = threading.Lock()

    def _slot(self, key: Prefix) -> Tuple[Hashable, Key]:
        return self._scope(), _as_key(key)

    def _prune(self, now: float) -> None:
        expired = [s for s, (stored_at, _) in self._entries.items() if now - stored_at >= self._ttl]
        for s in expired:
            del self._entries[s]

    def fetch(self, key: Prefix, loader: Callable[[], Any]) -> Any:
        """Return the cached value for ``key`` or call ``loader``.

        ``None`` results (record not found) are returned but never stored.
        """
        slot = self._slot(key)
        if self._ttl > 0:
            with self._lock:
                hit = self._entries.get(slot)
                if hit and self._clock() - hit[0] < self._ttl:
                    return hit[1]

        value = loader()

        if self._ttl > 0 and value is not None:
            with self._lock:
                now = self._clock()
                self._prune(now)
                self._entries[slot] = (now, value)
        return value

    def invalidate(self, *prefixes: Prefix) -> int:
        keys = [_as_key(p) for p in prefixes]
        with self._lock:
            stale = [s for s in self._entries if any(s[1][: len(p)] == p for p in keys)]
            for s in stale:
                del self._entries[s]
        if stale:
            logger.debug("cache invalidated %d key(s) for %s", len(stale), prefixes)
        return len(stale)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, key: Prefix) -> bool:
        with self._lock:
            return self._slot(key) in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


def invalidates(*prefixes: Prefix):
    """Mark a service write: on success, drop cached keys under ``prefixes``.

    The decorated method's instance must expose the cache as ``self._cache``.
    """

    def decorator(method):
        @wraps(method)
        def wrapper(self, *args, **kwargs):
            result = method(self, *args, **kwargs)
            self._cache.invalidate(*prefixes)
            return result

        return wrapper

    return decorator
