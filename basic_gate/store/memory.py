"""
In-memory multi-user credential store.

Design:
    - Holds any number of (user id -> bcrypt hash) records.
    - The mapping is copied at construction and never mutated afterwards,
      so concurrent lookups need no locking.
    - Plaintext passwords are only accepted by `from_passwords`, which hashes
      them once and discards them.

LLM Prompt Example:
    "Explain how an immutable in-memory table can replace a single configured
     user without changing the middleware that consults it."
"""

from typing import Dict, Mapping, Optional, Tuple

from ..config import BCRYPT_COST
from ..gate.verifier import hash_password
from .base import BaseCredentialStore

__all__ = ["MemoryCredentialStore", "parse_users"]


class MemoryCredentialStore(BaseCredentialStore):
    def __init__(self, records: Mapping[str, bytes], cost: int = BCRYPT_COST):
        """
        Args:
            records (Mapping[str, bytes]): user id -> bcrypt hash.
            cost (int): Work factor the records were hashed with.
        """
        self.cost = cost
        self._records: Dict[str, bytes] = dict(records)

    @classmethod
    def from_passwords(cls, users: Mapping[str, str], cost: int = BCRYPT_COST) -> "MemoryCredentialStore":
        """
        Build a store from plaintext passwords.

        Raises:
            HashingError: If any password cannot be hashed.
        """
        return cls(
            {user_id: hash_password(password, cost) for user_id, password in users.items()},
            cost=cost,
        )

    def get(self, user_id: str) -> Tuple[Optional[bytes], bool]:
        hashed = self._records.get(user_id)
        return hashed, hashed is not None

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._records


def parse_users(raw: str) -> Dict[str, str]:
    """
    Parse "alice:secret,bob:hunter2" into {"alice": "secret", "bob": "hunter2"}.

    Passwords may contain colons; entries are separated by commas.

    Raises:
        ValueError: If an entry has no colon or an empty user id.
    """
    users: Dict[str, str] = {}
    for entry in raw.split(","):
        entry = entry.strip()
        if not entry:
            continue
        user_id, sep, password = entry.partition(":")
        if not sep or not user_id:
            raise ValueError(f"Invalid user entry {entry.split(':', 1)[0]!r}: expected 'user:password'")
        users[user_id] = password
    return users
