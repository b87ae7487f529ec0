"""
CachedGate: BasicAuthGate plus a short-lived "recently authenticated" cache.

Responsibilities:
    - Skip extraction, lookup and bcrypt entirely for an Authorization header
      that was fully verified within the freshness window
    - Delegate everything else to `BasicAuthGate`
    - Remember a header only when the final response status is not 401

Design notes:
    - The cache key is the raw Authorization header value, not the decoded
      pair. Two encodings of the same credentials are separate entries.
    - Entries expire a fixed time after insertion. Every successful miss
      re-inserts, which refreshes the window.
    - Two concurrent misses for the same header may both verify and both
      write the same entry; that is duplicate work, not an error.
    - The cache and its sweep thread belong to this instance. `close()` stops
      the sweep; so does garbage collection of the gate.

LLM Prompt Example:
    "Explain why a credential cache must only be populated after the whole
    request succeeded, including any downstream authorization checks."
"""

import logging
import time
from typing import Callable, Optional

from fastapi import Request, Response

from ..cache.expiring import ExpiringCache
from ..config import DEFAULT_CACHE_EXPIRE, DEFAULT_CACHE_PURGE
from ..store.base import BaseCredentialStore
from .basic import BasicAuthGate, CallNext, GateOutcome, is_unauthorized
from .verifier import BcryptVerifier

__all__ = ["CachedGate"]

logger = logging.getLogger(__name__)

AUTHENTICATED = True


class CachedGate:
    def __init__(
        self,
        store: BaseCredentialStore,
        cache_expire: float = DEFAULT_CACHE_EXPIRE,
        cache_purge: float = DEFAULT_CACHE_PURGE,
        *,
        verifier: Optional[BcryptVerifier] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Args:
            store (BaseCredentialStore): Source of stored password hashes.
            cache_expire (float): Freshness window in seconds.
            cache_purge (float): Interval in seconds between expiry sweeps.
            verifier (Optional[BcryptVerifier]): Hash comparison, bcrypt by default.
            clock (Callable[[], float]): Time source for entry expiry.
        """
        self.basic = BasicAuthGate(store, verifier=verifier)
        self.cache = ExpiringCache(cache_expire, cache_purge, clock=clock)

    @classmethod
    def default(cls, store: BaseCredentialStore, **kwargs) -> "CachedGate":
        """Cached gate with a 10 minute freshness window and a 60 second sweep."""
        return cls(store, DEFAULT_CACHE_EXPIRE, DEFAULT_CACHE_PURGE, **kwargs)

    @property
    def store(self) -> BaseCredentialStore:
        return self.basic.store

    async def handle(self, request: Request, call_next: CallNext) -> GateOutcome:
        credential = request.headers.get("Authorization", "")

        if credential and self.cache.get(credential) is AUTHENTICATED:
            response = await call_next(request)
            return GateOutcome(response, accepted=not is_unauthorized(response))

        outcome = await self.basic.handle(request, call_next)
        if outcome.accepted:
            self.cache.set(credential, AUTHENTICATED)
            logger.debug("Cached authorization for %.0fs", self.cache.default_ttl)
        return outcome

    async def dispatch(self, request: Request, call_next: CallNext) -> Response:
        outcome = await self.handle(request, call_next)
        return outcome.response

    def close(self) -> None:
        """Stop the background sweep."""
        self.cache.close()

    def __enter__(self) -> "CachedGate":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
