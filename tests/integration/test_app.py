"""
HTTP-level tests through the FastAPI app factory.

Covers:
    - the alice/secret scenario (accept, wrong password, no header, bad base64)
    - cache behaviour observed through bcrypt call counts
    - a route that refuses verified credentials on its own
    - configuration from the environment
"""

import pytest
from fastapi import Response
from fastapi.testclient import TestClient

from basic_gate.gate.basic import BasicAuthGate
from basic_gate.gate.cached import CachedGate
from basic_gate.gate.credentials import encode_basic
from main import create_app

CHALLENGE = 'Basic realm="Authorization Required"'


def test_valid_credentials_reach_route(client, alice_header):
    response = client.get("/", headers={"Authorization": alice_header})
    assert response.status_code == 200
    assert response.json() == {"message": "Authenticated"}
    assert "www-authenticate" not in response.headers


def test_wrong_password_is_challenged(client):
    response = client.get("/", headers={"Authorization": encode_basic("alice", "wrong")})
    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == CHALLENGE
    assert response.text == "Not Authorized"


def test_missing_header_is_challenged(client):
    response = client.get("/")
    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == CHALLENGE


def test_invalid_base64_is_challenged(client, verifier):
    response = client.get("/", headers={"Authorization": "Basic not-base64!!"})
    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == CHALLENGE
    assert verifier.calls == 0


def test_every_route_is_gated(client, alice_header):
    assert client.get("/health_gate").status_code == 401
    response = client.get("/health_gate", headers={"Authorization": alice_header})
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_unknown_route_still_requires_auth(client, alice_header):
    assert client.get("/nope").status_code == 401
    assert client.get("/nope", headers={"Authorization": alice_header}).status_code == 404


def test_repeated_requests_hit_cache(client, verifier, alice_header):
    for _ in range(5):
        assert client.get("/", headers={"Authorization": alice_header}).status_code == 200
    assert verifier.calls == 1


def test_cache_disabled_verifies_every_request(store, verifier, alice_header):
    app = create_app(store=store, cache_enabled=False, verifier=verifier)
    assert isinstance(app.state.gate, BasicAuthGate)
    with TestClient(app) as client:
        for _ in range(3):
            assert client.get("/", headers={"Authorization": alice_header}).status_code == 200
    assert verifier.calls == 3


def test_downstream_refusal_is_passed_through_and_not_cached(store, verifier, alice_header):
    app = create_app(store=store, cache_enabled=True, verifier=verifier)

    @app.get("/locked")
    def locked():
        return Response("locked by route", status_code=401)

    with TestClient(app) as client:
        for _ in range(2):
            response = client.get("/locked", headers={"Authorization": alice_header})
            assert response.status_code == 401
            assert response.text == "locked by route"
    assert verifier.calls == 2
    assert len(app.state.gate.cache) == 0


def test_lifespan_stops_sweeper(store):
    app = create_app(store=store, cache_enabled=True, cache_expire=600, cache_purge=60)
    gate = app.state.gate
    assert isinstance(gate, CachedGate)
    with TestClient(app):
        assert gate.cache.running is True
    assert gate.cache.running is False


def test_create_app_from_environment(monkeypatch):
    monkeypatch.setenv("BASIC_GATE_STORE_BACKEND", "memory")
    monkeypatch.setenv("BASIC_GATE_USERS", "alice:secret,bob:hunter2")
    monkeypatch.setenv("BASIC_GATE_BCRYPT_COST", "4")
    app = create_app(cache_enabled=False)
    with TestClient(app) as client:
        assert client.get("/", headers={"Authorization": encode_basic("bob", "hunter2")}).status_code == 200
        assert client.get("/", headers={"Authorization": encode_basic("bob", "secret")}).status_code == 401


def test_create_app_without_credentials_fails(monkeypatch):
    monkeypatch.setenv("BASIC_GATE_STORE_BACKEND", "simple")
    monkeypatch.delenv("BASIC_GATE_USER", raising=False)
    monkeypatch.delenv("BASIC_GATE_PASSWORD", raising=False)
    with pytest.raises(ValueError):
        create_app()
