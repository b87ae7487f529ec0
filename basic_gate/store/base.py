"""
Base credential store interface for Basic Gate.

Purpose:
    Define the one-method contract every credential source (single user,
    in-memory table, SQL) implements, so the gate never changes when the
    backing lookup does.

Testing & Coverage:
    The abstract method is not executed directly in tests.
    It is annotated with `# pragma: no cover` so coverage tools don't
    penalize the project for an un-runnable abstract declaration.

LLM Prompt Example:
    "Show how a narrow, explicit credential lookup interface lets a Basic
    auth middleware switch from a single configured user to a database
    without touching the authentication logic."
"""

from abc import ABC, abstractmethod
from typing import Optional, Tuple

from ..config import BCRYPT_COST

__all__ = ["BaseCredentialStore"]


class BaseCredentialStore(ABC):
    """Abstract base class for credential stores."""

    # bcrypt work factor of the hashes this store hands out
    cost: int = BCRYPT_COST

    @abstractmethod  # pragma: no cover
    def get(self, user_id: str) -> Tuple[Optional[bytes], bool]:
        """
        Look up the stored password hash for a user id.

        Returns:
            Tuple[Optional[bytes], bool]: (hash, True) when the user exists,
            (None, False) otherwise. "Not found" is a normal outcome.

        Notes:
            Implementations must be pure reads: no mutation and no
            authentication decisions.
        """
        raise NotImplementedError
