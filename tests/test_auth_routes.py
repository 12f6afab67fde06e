"""Tests for sign-up, sign-in and token checks."""
from datetime import datetime, timedelta, timezone

import jwt

from seaward.config import SEAWARD_AUTH_SECRET


def test_sign_up_returns_token(client):
    response = client.post("/auth/sign-up", json={
        "email": "new@example.com", "password": "hunter22", "username": "newbie",
    })

    assert response.status_code == 200
    body = response.json()
    assert body["email"] == "new@example.com"
    assert body["token"]

    me = client.get("/auth/me", headers={"Authorization": f"Bearer {body['token']}"})
    assert me.status_code == 200
    assert me.json()["username"] == "newbie"
    assert "password_hash" not in me.json()


def test_sign_up_rejects_duplicate_email(client, user):
    response = client.post("/auth/sign-up", json={"email": user.email, "password": "hunter22"})

    assert response.status_code == 400


def test_sign_in_checks_password(client, user):
    ok = client.post("/auth/sign-in", json={"email": user.email, "password": "secret-password"})
    bad = client.post("/auth/sign-in", json={"email": user.email, "password": "nope"})

    assert ok.status_code == 200
    assert ok.json()["user_id"] == user.id
    assert bad.status_code == 401


def test_missing_token_is_rejected(client):
    assert client.get("/auth/me").status_code == 401


def test_expired_token_is_rejected(client, user):
    token = jwt.encode(
        {"sub": user.id, "exp": datetime.now(timezone.utc) - timedelta(minutes=1)},
        SEAWARD_AUTH_SECRET,
        algorithm="HS256",
    )

    response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Token has expired"


def test_logout(client, auth_headers):
    response = client.post("/auth/logout", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["success"] is True


def test_user_update_requires_self_or_admin(client, user, other_headers, admin_headers, auth_headers):
    assert client.patch(f"/api/users/{user.id}", json={"username": "x"}, headers=other_headers).status_code == 403
    assert client.patch(f"/api/users/{user.id}", json={"role": "admin"}, headers=auth_headers).status_code == 403

    response = client.patch(f"/api/users/{user.id}", json={"role": "admin"}, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["role"] == "admin"


def test_user_settings_report_failures_in_body(client, user, other_headers, auth_headers):
    denied = client.patch(f"/api/users/{user.id}/settings", json={"username": "x"}, headers=other_headers)
    allowed = client.patch(f"/api/users/{user.id}/settings", json={"username": "x"}, headers=auth_headers)

    assert denied.status_code == 400
    assert denied.json()["success"] is False
    assert allowed.json()["success"] is True


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
