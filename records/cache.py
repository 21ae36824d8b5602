"""
Short-lived response cache for the list and stats endpoints.

Values live in a Django cache backend (locmem by default, Redis when
``REDIS_URL`` is set).  The cache keeps its own index of insertion times
and TTLs, which decides expiry: a stale entry is dropped when it is read
and a background sweeper drops entries nobody asks for again.  The index
also makes substring invalidation possible, which the views use to drop
every cached list of a kind after a mutation.

The index is per process.  With a shared Redis backend and several
workers, an invalidation only reaches the worker that handled the
mutation; the others keep serving their entries until the TTL runs out.
Run a single worker, or disable the cache, where that matters.
"""
from __future__ import annotations

import logging
import math
import threading
import time
from typing import Any, Callable, Optional

from django.apps import apps
from django.core.cache import caches

logger = logging.getLogger(__name__)

DEFAULT_TTL = 5 * 60
SWEEP_INTERVAL = 10 * 60


class ResponseCache:
    def __init__(
        self,
        backend=None,
        *,
        default_ttl: float = DEFAULT_TTL,
        sweep_interval: float = SWEEP_INTERVAL,
        key_prefix: str = 'resp',
        clock: Callable[[], float] = time.monotonic,
    ):
        self.backend = backend if backend is not None else caches['default']
        self.default_ttl = default_ttl
        self.sweep_interval = sweep_interval
        self.key_prefix = key_prefix
        self.clock = clock
        self._index: dict[str, tuple[float, float]] = {}
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._sweeper: Optional[threading.Thread] = None

    def _backend_key(self, key: str) -> str:
        return f"{self.key_prefix}:{key}"

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        ttl = self.default_ttl if ttl is None else ttl
        # the backend timeout only bounds memory; the index decides expiry
        self.backend.set(self._backend_key(key), value, max(1, math.ceil(ttl)))
        with self._lock:
            self._index[key] = (self.clock(), ttl)

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            entry = self._index.get(key)
            if entry is None:
                return default
            inserted_at, ttl = entry
            if self.clock() - inserted_at > ttl:
                del self._index[key]
                stale = True
            else:
                stale = False
        if stale:
            self.backend.delete(self._backend_key(key))
            return default
        value = self.backend.get(self._backend_key(key), default)
        if value is default:
            # evicted by the backend (culling, restart); forget it too
            with self._lock:
                self._index.pop(key, None)
        return value

    def invalidate(self, key: str) -> None:
        with self._lock:
            self._index.pop(key, None)
        self.backend.delete(self._backend_key(key))

    def invalidate_by_substring(self, pattern: str) -> int:
        with self._lock:
            keys = [k for k in self._index if pattern in k]
            for k in keys:
                del self._index[k]
        if keys:
            self.backend.delete_many([self._backend_key(k) for k in keys])
        return len(keys)

    def clear(self) -> None:
        with self._lock:
            keys = list(self._index)
            self._index.clear()
        if keys:
            self.backend.delete_many([self._backend_key(k) for k in keys])

    def __len__(self) -> int:
        with self._lock:
            return len(self._index)

    def sweep(self) -> int:
        """Drop every expired entry; returns how many were dropped."""
        now = self.clock()
        with self._lock:
            expired = [k for k, (at, ttl) in self._index.items() if now - at > ttl]
            for k in expired:
                del self._index[k]
        if expired:
            self.backend.delete_many([self._backend_key(k) for k in expired])
        logger.debug('response cache sweep removed %d entries', len(expired))
        return len(expired)

    # -----------------------------------------------------------------
    # Background sweeper
    # -----------------------------------------------------------------
    def start_sweeper(self) -> None:
        if self._sweeper is not None and self._sweeper.is_alive():
            return
        self._stop.clear()
        self._sweeper = threading.Thread(target=self._run_sweeper, name='response-cache-sweeper', daemon=True)
        self._sweeper.start()

    def stop_sweeper(self, timeout: Optional[float] = None) -> None:
        self._stop.set()
        if self._sweeper is not None:
            self._sweeper.join(timeout)
            self._sweeper = None

    @property
    def sweeping(self) -> bool:
        return self._sweeper is not None and self._sweeper.is_alive()

    def _run_sweeper(self) -> None:
        while not self._stop.wait(self.sweep_interval):
            try:
                self.sweep()
            except Exception:
                # a backend hiccup must not end the sweeper
                logger.exception('response cache sweep failed')


def get_response_cache() -> Optional[ResponseCache]:
    """The cache owned by the records app, or ``None`` when disabled."""
    return apps.get_app_config('records').response_cache


def list_cache_key(kind: str, request) -> str:
    return f"records:{kind}:{request.get_full_path()}"


def stats_cache_key(request) -> str:
    return f"stats:{request.get_full_path()}"


def invalidate_kind(kind: str) -> None:
    """Drop cached lists of ``kind`` and all cached stats."""
    cache = get_response_cache()
    if cache is None:
        return
    cache.invalidate_by_substring(f"records:{kind}:")
    cache.invalidate_by_substring("stats:")
