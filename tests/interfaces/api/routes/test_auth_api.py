"""Tests for the authentication endpoints."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "Secret123!"


def test_login_returns_token_and_profile(client, admin):
    response = client.post(
        "/auth/token", data={"username": ADMIN_EMAIL, "password": ADMIN_PASSWORD}
    )

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["access_token"]
    assert body["user"]["email"] == ADMIN_EMAIL
    assert "password" not in body["user"]


def test_login_rejects_bad_credentials(client, admin):
    response = client.post(
        "/auth/token", data={"username": ADMIN_EMAIL, "password": "wrong-password"}
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid email or password"


def test_login_records_last_login_and_audit(client, admin, auth_headers):
    me = client.get("/auth/me", headers=auth_headers)
    assert me.status_code == 200
    assert me.json()["last_login"] is not None

    logs = client.get("/audit-logs/", params={"action": "LOGIN"}, headers=auth_headers)
    assert logs.json()["total"] == 1
    assert logs.json()["items"][0]["admin_email"] == ADMIN_EMAIL


def test_protected_routes_require_token(client):
    assert client.get("/auth/me").status_code == 401
    assert client.get("/templates/").status_code == 401
    invalid = {"Authorization": "Bearer not-a-token"}
    assert client.get("/auth/me", headers=invalid).status_code == 401


def test_logout_is_audited(client, auth_headers):
    response = client.post("/auth/logout", headers=auth_headers)

    assert response.status_code == 200
    logs = client.get("/audit-logs/", params={"action": "LOGOUT"}, headers=auth_headers)
    assert logs.json()["total"] == 1


def test_password_change_revokes_existing_tokens(client, auth_headers):
    response = client.put(
        "/auth/password",
        json={
            "current_password": ADMIN_PASSWORD,
            "new_password": "BrandNew456!",
            "confirm_password": "BrandNew456!",
        },
        headers=auth_headers,
    )
    assert response.status_code == 200, response.text

    assert client.get("/auth/me", headers=auth_headers).status_code == 401
    relogin = client.post(
        "/auth/token", data={"username": ADMIN_EMAIL, "password": "BrandNew456!"}
    )
    assert relogin.status_code == 200


def test_password_change_validates_input(client, auth_headers):
    wrong_current = client.put(
        "/auth/password",
        json={
            "current_password": "not-it",
            "new_password": "BrandNew456!",
            "confirm_password": "BrandNew456!",
        },
        headers=auth_headers,
    )
    mismatch = client.put(
        "/auth/password",
        json={
            "current_password": ADMIN_PASSWORD,
            "new_password": "BrandNew456!",
            "confirm_password": "Different789!",
        },
        headers=auth_headers,
    )

    assert wrong_current.status_code == 400
    assert mismatch.status_code == 400
    assert client.get("/auth/me", headers=auth_headers).status_code == 200
