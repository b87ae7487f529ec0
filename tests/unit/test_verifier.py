"""
Unit tests for bcrypt hashing and verification.

Covers:
    - hash format and salting
    - match / mismatch
    - corrupted hashes surfacing as VerificationError
    - bcrypt's 72-byte limit and invalid costs surfacing as HashingError
"""

import pytest

from basic_gate.errors import HashingError, VerificationError
from basic_gate.gate.verifier import BCRYPT_MAX_PASSWORD_BYTES, BcryptVerifier, hash_password

COST = 4


def test_hash_password_uses_requested_cost():
    hashed = hash_password("secret", COST)
    assert isinstance(hashed, bytes)
    assert hashed.startswith(b"$2b$04$")


def test_hash_password_is_salted():
    assert hash_password("secret", COST) != hash_password("secret", COST)


def test_compare_match_and_mismatch():
    hashed = hash_password("secret", COST)
    verifier = BcryptVerifier()
    assert verifier.compare(hashed, "secret") is True
    assert verifier.compare(hashed, "wrong") is False
    assert verifier.compare(hashed, "") is False


def test_compare_corrupted_hash_raises_verification_error():
    with pytest.raises(VerificationError):
        BcryptVerifier().compare(b"not-a-bcrypt-hash", "secret")


def test_password_at_limit_is_accepted():
    password = "x" * BCRYPT_MAX_PASSWORD_BYTES
    hashed = hash_password(password, COST)
    assert BcryptVerifier().compare(hashed, password) is True


def test_password_over_limit_raises_hashing_error():
    with pytest.raises(HashingError):
        hash_password("x" * (BCRYPT_MAX_PASSWORD_BYTES + 1), COST)


def test_limit_is_counted_in_utf8_bytes():
    # 37 characters, 74 bytes
    with pytest.raises(HashingError):
        hash_password("é" * 37, COST)


def test_invalid_cost_raises_hashing_error():
    with pytest.raises(HashingError):
        hash_password("secret", 3)
