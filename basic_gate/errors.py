"""
Error kinds raised inside Basic Gate.

Only `HashingError` is meant to reach an operator: it is raised while a
credential store is being built. The other two are raised and absorbed
inside the gate, and every one of them ends as the same 401 response.
"""

__all__ = ["GateError", "HashingError", "VerificationError", "MalformedCredentials"]


class GateError(Exception):
    """Base class for Basic Gate errors."""


class HashingError(GateError):
    """The hashing primitive could not produce a hash for a password."""


class VerificationError(GateError):
    """A stored hash could not be compared with a candidate password."""


class MalformedCredentials(GateError, ValueError):
    """The Authorization header does not carry a usable Basic credential."""
