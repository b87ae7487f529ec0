"""
ExpiringCache: a process-local, thread-safe key/value cache with per-entry TTL.

Responsibilities:
    - Store values with an absolute expiration time taken from a monotonic clock
    - Treat expired entries as misses on lookup, even before they are swept
    - Sweep expired entries in a background "janitor" thread at a fixed interval
    - Let operators revoke one entry (`delete`) or all of them (`flush`) early

Design:
    - One lock guards the entry dict; lookups, writes and sweeps are all atomic
      with respect to each other, so callers never lock.
    - The janitor only holds a weak reference to the cache. Dropping the last
      reference to the cache stops the thread; `close()` stops it explicitly.
    - A TTL <= 0 means "never expires"; a sweep interval <= 0 means "no janitor".

Internal schema:
    self._entries = {
        key: (value, expires_at or None),
    }

LLM Prompt Example:
    "Show how to bound the memory of a TTL cache with a background sweeper
    thread that does not keep the cache alive after its owner is gone."
"""

import logging
import threading
import time
import weakref
from typing import Any, Callable, Dict, Hashable, Optional, Tuple

__all__ = ["ExpiringCache"]

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


def _janitor(cache_ref: "weakref.ReferenceType[ExpiringCache]", interval: float, stop: threading.Event) -> None:
    while not stop.wait(interval):
        cache = cache_ref()
        if cache is None:
            return
        removed = cache.delete_expired()
        if removed:
            logger.debug("Swept %d expired cache entries", removed)
        del cache


class ExpiringCache:
    def __init__(self, default_ttl: float, sweep_interval: float, clock: Clock = time.monotonic):
        """
        Args:
            default_ttl (float): Seconds an entry stays fresh when `set` gets no ttl.
            sweep_interval (float): Seconds between background sweeps.
            clock (Callable[[], float]): Time source, monotonic by default.
        """
        self.default_ttl = default_ttl
        self.sweep_interval = sweep_interval
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: Dict[Hashable, Tuple[Any, Optional[float]]] = {}
        self._stop = threading.Event()
        self._janitor: Optional[threading.Thread] = None

        if sweep_interval > 0:
            self._janitor = threading.Thread(
                target=_janitor,
                args=(weakref.ref(self), sweep_interval, self._stop),
                name="basic-gate-cache-janitor",
                daemon=True,
            )
            self._janitor.start()
            weakref.finalize(self, self._stop.set)

    def _expires_at(self, ttl: Optional[float]) -> Optional[float]:
        if ttl is None:
            ttl = self.default_ttl
        if ttl <= 0:
            return None
        return self._clock() + ttl

    def set(self, key: Hashable, value: Any, ttl: Optional[float] = None) -> None:
        """Insert or replace `key`; the entry expires `ttl` seconds from now."""
        expires_at = self._expires_at(ttl)
        with self._lock:
            self._entries[key] = (value, expires_at)

    def get(self, key: Hashable) -> Optional[Any]:
        """Return the value for `key`, or None when absent or expired."""
        with self._lock:
            entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at is not None and self._clock() > expires_at:
            return None
        return value

    def delete(self, key: Hashable) -> None:
        """
        Drop `key` now instead of waiting for its TTL.

        Operator API: lets a deployment revoke one cached Authorization
        header (for example after disabling that user) without a restart.
        """
        with self._lock:
            self._entries.pop(key, None)

    def delete_expired(self) -> int:
        """
        Remove every expired entry.

        Returns:
            int: Number of entries removed.
        """
        now = self._clock()
        with self._lock:
            expired = [
                key for key, (_, expires_at) in self._entries.items()
                if expires_at is not None and now > expires_at
            ]
            for key in expired:
                del self._entries[key]
        return len(expired)

    def flush(self) -> None:
        """
        Drop every entry.

        Operator API: call after rotating credentials so every client is
        verified against the store again.
        """
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    @property
    def running(self) -> bool:
        """True while the janitor thread is sweeping."""
        return self._janitor is not None and self._janitor.is_alive()

    def close(self) -> None:
        """Stop the janitor thread. Entries remain readable."""
        self._stop.set()
        janitor = self._janitor
        if janitor is not None and janitor is not threading.current_thread():
            janitor.join()
