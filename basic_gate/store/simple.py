"""
SimpleBasic: the reference single-identity credential store.

The password is hashed once, at construction, with a deliberately high
bcrypt work factor. Only the hash is kept.
"""

from typing import Optional, Tuple

from ..config import BCRYPT_COST
from ..gate.verifier import hash_password
from .base import BaseCredentialStore

__all__ = ["SimpleBasic"]


class SimpleBasic(BaseCredentialStore):
    """
    Credential store holding exactly one (user id, password hash) pair.

    Args:
        user_id (str): The only accepted user id (matched case-sensitively).
        password (str): Plaintext password, hashed immediately.
        cost (int): bcrypt work factor, 12 unless overridden.

    Raises:
        HashingError: If bcrypt cannot hash the password.
    """

    def __init__(self, user_id: str, password: str, cost: int = BCRYPT_COST):
        self.user_id = user_id
        self.cost = cost
        self.hashed_password = hash_password(password, cost)

    def get(self, user_id: str) -> Tuple[Optional[bytes], bool]:
        if user_id == self.user_id:
            return self.hashed_password, True
        return None, False

    def __repr__(self) -> str:
        return f"SimpleBasic(user_id={self.user_id!r})"
