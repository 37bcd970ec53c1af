"""Login, token handling and role gate tests."""

import pytest

from spec_manager.dependencies import has_any
from spec_manager.services.security import TokenPayload, create_access_token


@pytest.mark.asyncio
async def test_login_admin(client):
    response = await client.post(
        "/api/auth/login", json={"email": "admin@example.com", "password": "Admin123!"}
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["token"]
    assert data["user"]["email"] == "admin@example.com"
    assert data["user"]["fullName"] == "Admin Test User"
    assert sorted(data["user"]["roles"]) == ["ADMINISTRATOR", "CREATOR"]


@pytest.mark.asyncio
async def test_login_creator_roles(creator_login):
    assert creator_login["user"]["roles"] == ["CREATOR"]


@pytest.mark.asyncio
async def test_wrong_password_and_unknown_email_look_the_same(client):
    wrong_password = await client.post(
        "/api/auth/login", json={"email": "admin@example.com", "password": "nope"}
    )
    unknown_email = await client.post(
        "/api/auth/login", json={"email": "ghost@example.com", "password": "Admin123!"}
    )
    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json()["error"] == unknown_email.json()["error"]
    assert wrong_password.json()["error"]["message"] == "Invalid email or password"


@pytest.mark.asyncio
async def test_login_missing_fields(client):
    response = await client.post("/api/auth/login", json={"email": "admin@example.com"})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_login_invalid_email(client):
    response = await client.post("/api/auth/login", json={"email": "not-an-email", "password": "x"})
    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Invalid email or password"


@pytest.mark.asyncio
async def test_login_email_is_case_sensitive(client):
    response = await client.post(
        "/api/auth/login", json={"email": "admin@EXAMPLE.COM", "password": "Admin123!"}
    )
    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Invalid email or password"


@pytest.mark.asyncio
async def test_me(client, creator_headers):
    response = await client.get("/api/auth/me", headers=creator_headers)
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["email"] == "creator@example.com"
    assert data["roles"] == ["CREATOR"]


@pytest.mark.asyncio
async def test_missing_header(client):
    response = await client.get("/api/auth/me")
    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Authorization header is missing"


@pytest.mark.asyncio
async def test_malformed_header(client):
    response = await client.get("/api/auth/me", headers={"Authorization": "Token abc"})
    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Invalid authorization header format"


@pytest.mark.asyncio
async def test_invalid_token(client):
    response = await client.get("/api/auth/me", headers={"Authorization": "Bearer not.a.jwt"})
    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Invalid or expired token"


@pytest.mark.asyncio
async def test_expired_token(client, creator_login):
    user = creator_login["user"]
    token = create_access_token(
        TokenPayload(user_id=user["id"], email=user["email"], roles=user["roles"]), expires_in=-60
    )
    response = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"


@pytest.mark.asyncio
async def test_creator_cannot_read_schema(client, creator_headers, default_schema_id):
    response = await client.get(f"/api/schema/{default_schema_id}", headers=creator_headers)
    assert response.status_code == 403
    assert response.json()["error"]["code"] == "FORBIDDEN"


def test_has_any():
    assert has_any(["CREATOR"], ["ADMINISTRATOR", "CREATOR"])
    assert has_any(["ADMINISTRATOR", "CREATOR"], ["ADMINISTRATOR"])
    assert not has_any(["CREATOR"], ["ADMINISTRATOR"])
    assert not has_any([], ["CREATOR"])
