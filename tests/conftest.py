"""
Global pytest fixtures for the Basic Gate test suite.

Responsibilities:
    - Provide cheap bcrypt-backed stores (cost 4) so tests stay fast
    - Provide a verifier that counts how often bcrypt actually runs
    - Provide a recording downstream continuation and a request builder
    - Provide a fresh TestClient via the app factory for integration tests

LLM Prompt Example:
    "Show how to structure pytest fixtures so a middleware can be tested
    both in isolation (fake request + fake continuation) and through HTTP."
"""

import threading
from typing import Optional

import pytest
from fastapi import Request
from fastapi.responses import PlainTextResponse
from fastapi.testclient import TestClient

from basic_gate.gate.credentials import encode_basic
from basic_gate.gate.verifier import BcryptVerifier
from basic_gate.store.simple import SimpleBasic
from main import create_app

TEST_COST = 4


class CountingVerifier(BcryptVerifier):
    """bcrypt verifier that records how many comparisons ran."""

    def __init__(self):
        self.calls = 0
        self._lock = threading.Lock()

    def compare(self, hashed_password: bytes, password: str) -> bool:
        with self._lock:
            self.calls += 1
        return super().compare(hashed_password, password)


class Downstream:
    """Stand-in for the rest of the request chain."""

    def __init__(self, status_code: int = 200, error: Optional[Exception] = None):
        self.status_code = status_code
        self.error = error
        self.calls = 0

    async def __call__(self, request: Request):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return PlainTextResponse("downstream", status_code=self.status_code)


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def build_request(authorization: Optional[str] = None) -> Request:
    headers = []
    if authorization is not None:
        headers.append((b"authorization", authorization.encode("latin-1")))
    return Request({
        "type": "http",
        "method": "GET",
        "path": "/",
        "query_string": b"",
        "headers": headers,
    })


@pytest.fixture
def store() -> SimpleBasic:
    """Single-identity store for ("alice", "secret") at a test-friendly cost."""
    return SimpleBasic("alice", "secret", cost=TEST_COST)


@pytest.fixture
def verifier() -> CountingVerifier:
    return CountingVerifier()


@pytest.fixture
def downstream() -> Downstream:
    return Downstream()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_request():
    return build_request


@pytest.fixture
def alice_header() -> str:
    return encode_basic("alice", "secret")


@pytest.fixture
def client(store, verifier):
    """
    Provide a TestClient over a fresh, cached app instance.

    Notes:
        - Entered as a context manager so the app lifespan stops the cache sweeper.
    """
    app = create_app(store=store, cache_enabled=True, cache_expire=600, cache_purge=60, verifier=verifier)
    with TestClient(app) as test_client:
        yield test_client
