"""
Constructors and FastAPI wiring for Basic Gate.

Usage:
    from fastapi import FastAPI
    from basic_gate import SimpleBasic, cache_basic_default, install_gate

    app = FastAPI()
    install_gate(app, cache_basic_default(SimpleBasic("alice", "secret")))
"""

from typing import Union

from fastapi import FastAPI

from .config import BCRYPT_COST, DEFAULT_CACHE_EXPIRE, DEFAULT_CACHE_PURGE
from .gate.basic import BasicAuthGate
from .gate.cached import CachedGate
from .store.base import BaseCredentialStore
from .store.simple import SimpleBasic

__all__ = ["Gate", "new_basic", "basic", "cache_basic", "cache_basic_default", "install_gate"]

Gate = Union[BasicAuthGate, CachedGate]


def new_basic(store: BaseCredentialStore, **kwargs) -> BasicAuthGate:
    """Uncached gate over any credential store."""
    return BasicAuthGate(store, **kwargs)


def basic(user_id: str, password: str, cost: int = BCRYPT_COST) -> BasicAuthGate:
    """
    Uncached gate for a single identity.

    Raises:
        HashingError: If the password cannot be hashed. The error propagates;
            there is no fallback to an open gate.
    """
    return BasicAuthGate(SimpleBasic(user_id, password, cost=cost))


def cache_basic(
    store: BaseCredentialStore,
    cache_expire: float,
    cache_purge: float,
    **kwargs,
) -> CachedGate:
    """Cached gate with an explicit freshness window and sweep interval (seconds)."""
    return CachedGate(store, cache_expire, cache_purge, **kwargs)


def cache_basic_default(store: BaseCredentialStore, **kwargs) -> CachedGate:
    """Cached gate using the default 10 minute window and 60 second sweep."""
    return CachedGate(store, DEFAULT_CACHE_EXPIRE, DEFAULT_CACHE_PURGE, **kwargs)


def install_gate(app: FastAPI, gate: Gate) -> None:
    """Put `gate` in front of every route of `app` as HTTP middleware."""
    app.middleware("http")(gate.dispatch)
