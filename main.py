"""
Main API module for Basic Gate.

Responsibilities:
    - Build a FastAPI app whose every route sits behind the Basic auth gate
    - Choose the credential store and the cache policy from configuration
    - Stop the cache sweeper when the app shuts down

Run:
    uvicorn main:create_app --factory

Architecture:
    - App Factory pattern (create_app) for test isolation and DI.
    - The store comes from `get_store()` unless one is injected.
    - `CachedGate` by default; plain `BasicAuthGate` when the cache is disabled.

LLM Prompt Example:
    "Explain how to put an authentication middleware in front of a FastAPI
    application built with an app factory, so tests can inject their own
    credential store."
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from pydantic import BaseModel

from basic_gate.config import settings
from basic_gate.gate.basic import BasicAuthGate
from basic_gate.gate.cached import CachedGate
from basic_gate.gate.verifier import BcryptVerifier
from basic_gate.middleware import Gate, install_gate
from basic_gate.store.base import BaseCredentialStore
from basic_gate.store.store_factory import get_store


class MessageOut(BaseModel):
    """Response body for the protected root route."""
    message: str


class HealthOut(BaseModel):
    status: str


def build_gate(
    store: BaseCredentialStore,
    cache_enabled: bool,
    cache_expire: float,
    cache_purge: float,
    verifier: Optional[BcryptVerifier] = None,
) -> Gate:
    if cache_enabled:
        return CachedGate(store, cache_expire, cache_purge, verifier=verifier)
    return BasicAuthGate(store, verifier=verifier)


def create_app(
    store: Optional[BaseCredentialStore] = None,
    cache_enabled: Optional[bool] = None,
    cache_expire: Optional[float] = None,
    cache_purge: Optional[float] = None,
    verifier: Optional[BcryptVerifier] = None,
) -> FastAPI:
    """
    Factory function to build and configure a new FastAPI app instance.

    Args:
        store (Optional[BaseCredentialStore]): Credential store; from config when omitted.
        cache_enabled (Optional[bool]): Wrap the gate with the authorization cache.
        cache_expire (Optional[float]): Freshness window in seconds.
        cache_purge (Optional[float]): Sweep interval in seconds.
        verifier (Optional[BcryptVerifier]): Hash comparison override.

    Returns:
        FastAPI: A configured app whose gate (and cache) belong to this instance.

    Raises:
        ValueError: If the configured store backend is unknown or incomplete.
        HashingError: If a configured password cannot be hashed.
    """
    log = logging.getLogger("basic_gate")

    # basic console logging (optional)
    if not logging.getLogger().handlers:
        logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL, logging.INFO))

    # ----------------------------------------------------------------
    # Per-app instances (isolated for tests, swappable for production)
    # ----------------------------------------------------------------
    if store is None:
        store = get_store()  # ← simple, memory or postgres based on env
    if cache_enabled is None:
        cache_enabled = settings.CACHE_ENABLED
    gate = build_gate(
        store,
        cache_enabled,
        settings.CACHE_EXPIRE if cache_expire is None else cache_expire,
        settings.CACHE_PURGE if cache_purge is None else cache_purge,
        verifier=verifier,
    )
    log.info("Basic gate ready: store=%r cached=%s", store, cache_enabled)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        if isinstance(gate, CachedGate):
            gate.close()

    app = FastAPI(
        title="Basic Gate",
        description="HTTP Basic authentication gate with a short-lived authorization cache",
        lifespan=lifespan,
    )
    app.state.gate = gate
    install_gate(app, gate)

    # ----------------------------------------------------------------
    # Routes (all behind the gate)
    # ----------------------------------------------------------------
    @app.get("/", response_model=MessageOut)
    def root() -> MessageOut:
        return MessageOut(message="Authenticated")

    @app.get("/health_gate", response_model=HealthOut)
    def health_gate() -> HealthOut:
        return HealthOut(status="ok")

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(create_app(), host="0.0.0.0", port=8000)
