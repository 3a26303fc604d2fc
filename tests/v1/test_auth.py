# tests/v1/test_auth.py
"""Tests for authentication endpoints."""

from datetime import datetime, timedelta

from fastapi import status


def test_signup_returns_user_and_token(client) -> None:
    response = client.post(
        "/api/v1/auth/signup",
        json={"email": "dana@example.com", "username": "dana", "password": "hunter22"},
    )

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["user"]["username"] == "dana"
    assert data["user"]["email"] == "dana@example.com"
    assert "password_hash" not in data["user"]
    assert data["token"]

    me = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {data['token']}"})
    assert me.status_code == status.HTTP_200_OK
    assert me.json()["username"] == "dana"


def test_signup_duplicate_username(client, alice) -> None:
    response = client.post(
        "/api/v1/auth/signup",
        json={"email": "fresh@example.com", "username": "alice", "password": "hunter22"},
    )
    assert response.status_code == status.HTTP_409_CONFLICT


def test_signup_validates_payload(client) -> None:
    response = client.post(
        "/api/v1/auth/signup",
        json={"email": "not-an-email", "username": "x", "password": "123"},
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_signup_rejects_padded_short_username(client) -> None:
    response = client.post(
        "/api/v1/auth/signup",
        json={"email": "pad@example.com", "username": "  ab  ", "password": "hunter22"},
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_signup_trims_username_and_returns_utc_timestamp(client) -> None:
    response = client.post(
        "/api/v1/auth/signup",
        json={"email": "pad@example.com", "username": "  padded  ", "password": "hunter22"},
    )

    assert response.status_code == status.HTTP_201_CREATED
    user = response.json()["user"]
    assert user["username"] == "padded"
    assert datetime.fromisoformat(user["created_at"]).utcoffset() == timedelta(0)


def test_login_sets_cookie(client, alice, password) -> None:
    response = client.post(
        "/api/v1/auth/login",
        json={"email_or_username": "alice", "password": password},
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["user"]["id"] == alice.id
    assert "auth-token=" in response.headers["set-cookie"]


def test_login_wrong_password(client, alice) -> None:
    response = client.post(
        "/api/v1/auth/login",
        json={"email_or_username": "alice@example.com", "password": "nope-nope"},
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["detail"] == "Invalid credentials"


def test_logout_clears_cookie(client) -> None:
    response = client.post("/api/v1/auth/logout")
    assert response.status_code == status.HTTP_200_OK
    assert "auth-token=" in response.headers["set-cookie"]


def test_me_requires_authentication(client) -> None:
    assert client.get("/api/v1/auth/me").status_code == status.HTTP_401_UNAUTHORIZED
    bad = client.get("/api/v1/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert bad.status_code == status.HTTP_401_UNAUTHORIZED


def test_me_accepts_cookie(client, alice, alice_headers) -> None:
    token = alice_headers["Authorization"].removeprefix("Bearer ")
    response = client.get("/api/v1/auth/me", headers={"Cookie": f"auth-token={token}"})

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["id"] == alice.id
