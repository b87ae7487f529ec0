"""
Password hashing and verification for Basic Gate.

Responsibilities:
    - Produce salted bcrypt hashes for credential stores (`hash_password`)
    - Compare a candidate password with a stored hash (`BcryptVerifier`)

Design:
    - bcrypt's running time is set by the work factor embedded in the stored
      hash, not by the length of the candidate password.
    - bcrypt only looks at the first 72 bytes of a password. Longer passwords
      are refused at hashing time instead of being silently truncated.
    - Any comparison failure other than a plain mismatch surfaces as
      `VerificationError`; the gate folds it into an ordinary rejection.

LLM Prompt Example:
    "Explain why bcrypt's tunable work factor makes brute-force guessing of a
    leaked hash expensive, and why the cost must be fixed when the hash is made."
"""

import bcrypt

from ..config import BCRYPT_COST
from ..errors import HashingError, VerificationError

__all__ = ["BCRYPT_MAX_PASSWORD_BYTES", "hash_password", "BcryptVerifier"]

BCRYPT_MAX_PASSWORD_BYTES = 72


def hash_password(password: str, cost: int = BCRYPT_COST) -> bytes:
    """
    Hash a plaintext password with bcrypt.

    Args:
        password (str): Plaintext password.
        cost (int): bcrypt log rounds (work factor).

    Returns:
        bytes: Modular-crypt hash such as b"$2b$12$...".

    Raises:
        HashingError: If bcrypt cannot process the password or the cost.
    """
    secret = password.encode("utf-8")
    if len(secret) > BCRYPT_MAX_PASSWORD_BYTES:
        raise HashingError(
            f"password is {len(secret)} bytes; bcrypt accepts at most {BCRYPT_MAX_PASSWORD_BYTES}"
        )
    try:
        return bcrypt.hashpw(secret, bcrypt.gensalt(rounds=cost))
    except (ValueError, TypeError) as exc:
        raise HashingError(str(exc)) from exc


class BcryptVerifier:
    """Compares plaintext passwords with bcrypt hashes."""

    def compare(self, hashed_password: bytes, password: str) -> bool:
        """
        Return True when `password` matches `hashed_password`.

        Raises:
            VerificationError: If the hash is malformed or bcrypt refuses the input.
        """
        try:
            return bcrypt.checkpw(password.encode("utf-8"), hashed_password)
        except (ValueError, TypeError) as exc:
            raise VerificationError(str(exc)) from exc
