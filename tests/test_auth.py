"""Tests for bearer-token resolution in front of the task endpoints."""

from datetime import timedelta

import pytest

from task_manager.core.jwt import create_access_token, decode_access_token
from task_manager.core.security import hash_password, verify_password

pytestmark = pytest.mark.db

UNAUTHENTICATED = {"success": False, "message": "Unauthenticated."}


@pytest.mark.parametrize(
    "method, path",
    [
        ("GET", "/tasks"),
        ("POST", "/tasks"),
        ("GET", "/tasks/1"),
        ("PUT", "/tasks/1"),
        ("DELETE", "/tasks/1"),
        ("GET", "/user"),
    ],
)
def test_missing_token_is_rejected_on_every_route(client, method, path, count_tasks):
    response = client.request(method, path, json={"title": "x"} if method in ("POST", "PUT") else None)
    assert response.status_code == 401
    assert response.json() == UNAUTHENTICATED
    assert response.headers["www-authenticate"] == "Bearer"
    assert count_tasks() == 0


@pytest.mark.parametrize("method, path", [("POST", "/tasks"), ("PUT", "/tasks/1")])
def test_missing_token_wins_over_malformed_body(client, method, path):
    response = client.request(
        method, path, content=b'{"title": ', headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 401
    assert response.json() == UNAUTHENTICATED


def test_garbage_token_is_rejected(client):
    response = client.get("/tasks", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    assert response.json() == UNAUTHENTICATED


def test_non_bearer_scheme_is_rejected(client, alice):
    response = client.get("/tasks", headers={"Authorization": f"Basic {alice.token}"})
    assert response.status_code == 401


def test_expired_token_is_rejected(client, alice):
    token = create_access_token({"user_id": str(alice.id)}, expires_delta=timedelta(seconds=-30))
    response = client.get("/tasks", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_token_signed_with_other_key_is_rejected(client, alice):
    import jwt

    token = jwt.encode({"user_id": str(alice.id)}, "some-other-secret-key-of-decent-length", algorithm="HS256")
    response = client.get("/tasks", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_token_without_user_claim_is_rejected(client):
    token = create_access_token({"email": "nobody@example.com"})
    response = client.get("/tasks", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_token_for_unknown_user_is_rejected(client):
    token = create_access_token({"user_id": "9999"})
    response = client.get("/tasks", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_inactive_user_is_rejected(client, make_user):
    user = make_user(is_active=False)
    response = client.get("/tasks", headers=user.headers)
    assert response.status_code == 401


def test_current_user_endpoint(client, alice):
    response = client.get("/user", headers=alice.headers)
    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "data": {"id": alice.id, "name": "Alice", "email": "alice@example.com"},
    }


@pytest.mark.unit
def test_token_round_trip():
    token = create_access_token({"user_id": "42"})
    payload = decode_access_token(token)
    assert payload["user_id"] == "42"
    assert "exp" in payload


@pytest.mark.unit
def test_decode_rejects_tampered_token():
    token = create_access_token({"user_id": "42"})
    other = create_access_token({"user_id": "43"})
    header, payload, _ = token.split(".")
    forged = ".".join([header, payload, other.split(".")[2]])
    assert decode_access_token(forged) is None


@pytest.mark.unit
def test_password_hash_verifies(password_hash):
    assert verify_password("secret123", password_hash)
    assert not verify_password("secret124", password_hash)
    assert not verify_password("secret123", "not-a-bcrypt-hash")


@pytest.mark.unit
def test_overlong_password_is_refused():
    with pytest.raises(ValueError):
        hash_password("x" * 73)
    assert not verify_password("x" * 73, hash_password("x" * 72))
