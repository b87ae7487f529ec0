"""
basic_gate package initializer.

HTTP Basic authentication gate for FastAPI/Starlette applications, with
bcrypt-hashed credential stores and an optional short-lived cache of
recently authenticated Authorization headers.
"""

from . import cache
from . import gate
from . import store
from .errors import GateError, HashingError, MalformedCredentials, VerificationError
from .gate.basic import BasicAuthGate, GateOutcome
from .gate.cached import CachedGate
from .gate.credentials import Credentials, get_credentials
from .gate.verifier import BcryptVerifier, hash_password
from .middleware import basic, cache_basic, cache_basic_default, install_gate, new_basic
from .store.base import BaseCredentialStore
from .store.memory import MemoryCredentialStore
from .store.simple import SimpleBasic

__all__ = [
    "cache",
    "gate",
    "store",
    "GateError",
    "HashingError",
    "MalformedCredentials",
    "VerificationError",
    "BasicAuthGate",
    "GateOutcome",
    "CachedGate",
    "Credentials",
    "get_credentials",
    "BcryptVerifier",
    "hash_password",
    "basic",
    "cache_basic",
    "cache_basic_default",
    "install_gate",
    "new_basic",
    "BaseCredentialStore",
    "MemoryCredentialStore",
    "SimpleBasic",
]
