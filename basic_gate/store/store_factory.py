"""
Store factory - switch credential backend from config (lazy env version)
========================================================================

This module centralizes selection of the credential store so the gate and
the app stay ignorant of where hashes live.

- Reads environment **at call time** to avoid stale values in tests.
- Imports the DB backend **only if** the selected backend is "postgres".

Environment variables
---------------------
- BASIC_GATE_STORE_BACKEND : "simple" (default), "memory" or "postgres"
- BASIC_GATE_USER / BASIC_GATE_PASSWORD : identity for "simple"
- BASIC_GATE_USERS         : "user:password,..." for "memory"
- BASIC_GATE_DB_DSN        : DSN string if backend=="postgres"
- BASIC_GATE_DB_TABLE      : credentials table name (default "credentials")
- BASIC_GATE_BCRYPT_COST   : work factor used when hashing configured passwords

A `cost` override, like the environment value, is clamped to bcrypt's [4, 31].
"""

import logging
import os
from typing import Optional

from basic_gate.config import bcrypt_cost, clamp_cost
from basic_gate.store.base import BaseCredentialStore
from basic_gate.store.memory import MemoryCredentialStore, parse_users
from basic_gate.store.simple import SimpleBasic

logger = logging.getLogger(__name__)


def _cost(kwargs) -> int:
    if "cost" in kwargs:
        return clamp_cost(kwargs["cost"])
    return bcrypt_cost()


def get_store(backend: Optional[str] = None, **kwargs) -> BaseCredentialStore:
    """
    Return a credential store based on configuration.

    Parameters
    ----------
    backend : str, optional
        "simple" (default), "memory" or "postgres". If omitted, reads
        BASIC_GATE_STORE_BACKEND.
    kwargs : dict
        Overrides for the backend: user_id/password (simple), users (memory),
        dsn/table (postgres), cost (simple and memory).

    Returns
    -------
    BaseCredentialStore-compatible instance

    Raises
    ------
    ValueError
        Unknown backend or missing required settings.
    HashingError
        A configured password cannot be hashed.
    """
    be = (backend or os.getenv("BASIC_GATE_STORE_BACKEND", "simple")).strip().lower()
    logger.info("Selected credential store backend: %r", be)

    if be == "simple":
        user_id = kwargs.get("user_id") or os.getenv("BASIC_GATE_USER", "")
        password = kwargs.get("password") or os.getenv("BASIC_GATE_PASSWORD", "")
        if not user_id or not password:
            raise ValueError(
                "BASIC_GATE_USER and BASIC_GATE_PASSWORD are required for the simple backend"
            )
        return SimpleBasic(user_id, password, cost=_cost(kwargs))

    if be == "memory":
        users = kwargs.get("users")
        if users is None:
            users = parse_users(os.getenv("BASIC_GATE_USERS", ""))
        if not users:
            raise ValueError("BASIC_GATE_USERS is required for the memory backend")
        return MemoryCredentialStore.from_passwords(users, cost=_cost(kwargs))

    if be == "postgres":
        dsn = kwargs.get("dsn") or os.getenv("BASIC_GATE_DB_DSN", "")
        if not dsn:
            raise ValueError("DB_DSN is required for postgres backend (env BASIC_GATE_DB_DSN)")
        table = kwargs.get("table") or os.getenv("BASIC_GATE_DB_TABLE", "credentials")
        # Local import to avoid hard dependency when not using postgres
        from basic_gate.store.db_store import DBCredentialStore
        return DBCredentialStore(dsn=dsn, table=table)

    raise ValueError(f"Unknown credential store backend: {be!r}")
