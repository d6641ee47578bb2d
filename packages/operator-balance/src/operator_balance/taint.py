"""
TTL cache of stores that recently failed to take a scheduling operation.

Filters consult the cache to skip tainted stores for a cooldown period, so
callers do not have to track per-store cooldowns themselves.

Expiry is enforced twice:
- Lazily: is_tainted() ignores entries older than the TTL
- Eagerly: a background sweep thread removes expired entries every
  gc_interval seconds

The sweep thread is owned by the cache. It starts on construction and
stops on close() (or on leaving a `with` block).
"""

import logging
import threading
import time
import weakref
from collections.abc import Callable

from operator_balance.config import BalanceSettings
from operator_balance.config import settings as default_settings
from operator_balance.types import StoreId

logger = logging.getLogger(__name__)


class TaintCache:
    """
    Thread-safe store suppression set with a fixed per-entry TTL.

    Example:
        with TaintCache(gc_interval=5.0, ttl=300.0) as cache:
            cache.put(store_id)
            if cache.is_tainted(store_id):
                ...  # skip this store for now
    """

    def __init__(
        self,
        gc_interval: float | None = None,
        ttl: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize the cache and start its sweep thread.

        Args:
            gc_interval: Seconds between sweeps (defaults to settings)
            ttl: Seconds an entry stays tainted (defaults to settings)
            clock: Monotonic time source, injectable for tests

        Raises:
            ValueError: If the timings are non-positive or gc_interval >= ttl
        """
        gc_interval = (
            gc_interval
            if gc_interval is not None
            else default_settings.taint_gc_interval_seconds
        )
        ttl = ttl if ttl is not None else default_settings.taint_ttl_seconds
        if gc_interval <= 0 or ttl <= 0:
            raise ValueError("gc_interval and ttl must be positive")
        if gc_interval >= ttl:
            raise ValueError(
                f"gc_interval ({gc_interval}s) must be shorter than ttl ({ttl}s)"
            )

        self.gc_interval = gc_interval
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[StoreId, float] = {}
        self._lock = threading.Lock()
        self._shutdown = threading.Event()
        # The thread only holds a weak reference, so an unclosed cache can
        # still be collected; collection wakes and stops the thread.
        self._thread = threading.Thread(
            target=_gc_loop,
            args=(weakref.ref(self), self._shutdown, gc_interval),
            name="taint-cache-gc",
            daemon=True,
        )
        weakref.finalize(self, self._shutdown.set)
        self._thread.start()

    def put(self, store_id: StoreId) -> None:
        """Taint a store, or refresh its taint, as of now."""
        with self._lock:
            self._entries[store_id] = self._clock()
        logger.debug("Tainted store %s for %.0fs", store_id, self.ttl)

    def is_tainted(self, store_id: StoreId) -> bool:
        """Return True if store_id has an unexpired taint."""
        with self._lock:
            inserted = self._entries.get(store_id)
            if inserted is None:
                return False
            return not self._expired(inserted, self._clock())

    __contains__ = is_tainted

    def remove(self, store_id: StoreId) -> None:
        """Clear the taint on a store. No-op if it is not tainted."""
        with self._lock:
            self._entries.pop(store_id, None)

    def clear(self) -> None:
        """Clear all taints."""
        with self._lock:
            self._entries.clear()

    def tainted_ids(self) -> list[StoreId]:
        """Return the ids of all stores with an unexpired taint."""
        with self._lock:
            now = self._clock()
            return [
                store_id
                for store_id, inserted in self._entries.items()
                if not self._expired(inserted, now)
            ]

    def __len__(self) -> int:
        """Number of stored entries, including expired ones not yet swept."""
        with self._lock:
            return len(self._entries)

    def sweep(self) -> int:
        """
        Remove all expired entries.

        Returns:
            Number of entries removed
        """
        with self._lock:
            now = self._clock()
            expired = [
                store_id
                for store_id, inserted in self._entries.items()
                if self._expired(inserted, now)
            ]
            for store_id in expired:
                del self._entries[store_id]

        if expired:
            logger.debug("Taint cache swept %d expired store(s)", len(expired))
        return len(expired)

    def close(self) -> None:
        """Stop the sweep thread. Safe to call more than once."""
        self._shutdown.set()
        if self._thread.is_alive() and self._thread is not threading.current_thread():
            self._thread.join()

    @property
    def closed(self) -> bool:
        return self._shutdown.is_set()

    def __enter__(self) -> "TaintCache":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _expired(self, inserted: float, now: float) -> bool:
        return now - inserted > self.ttl


def _gc_loop(
    cache_ref: "weakref.ref[TaintCache]",
    shutdown: threading.Event,
    interval: float,
) -> None:
    # Event.wait returns True once close() is called or the cache is collected
    while not shutdown.wait(timeout=interval):
        cache = cache_ref()
        if cache is None:
            return
        cache.sweep()
        del cache


def new_taint_cache(settings: BalanceSettings | None = None) -> TaintCache:
    """
    Create a taint cache to hold stores that are not able to schedule
    operators.

    Every call starts its own sweep thread. The thread stops on close(),
    or when the cache is garbage-collected; close() explicitly on teardown
    rather than relying on collection.

    Args:
        settings: Timings to use (defaults to the environment settings)

    Returns:
        A running TaintCache. Call close() on teardown.
    """
    settings = settings or default_settings
    return TaintCache(
        gc_interval=settings.taint_gc_interval_seconds,
        ttl=settings.taint_ttl_seconds,
    )
