import pytest
from httpx import AsyncClient

from config import ApplicationConfig
from src.app.services.token_service import (
    TokenService,
    get_token_service,
    init_token_service,
    reset_token_service,
)


@pytest.mark.asyncio
async def test_missing_token(client: AsyncClient):
    response = await client.get("/states")

    assert response.status_code == 401
    assert response.json() == {
        "error": "Authentication required",
        "code": "AUTHENTICATION_REQUIRED",
    }


@pytest.mark.asyncio
async def test_garbage_token(client: AsyncClient):
    response = await client.get("/states", headers={"Authorization": "Bearer garbage"})

    assert response.status_code == 401
    assert response.json()["code"] == "INVALID_TOKEN"
    assert response.json()["error"] == "Invalid or expired token"


@pytest.mark.asyncio
async def test_token_signed_with_other_secret(client: AsyncClient):
    forged = TokenService("another-secret").create_access_token(1, "mallory", "admin")

    response = await client.get("/states", headers={"Authorization": f"Bearer {forged}"})

    assert response.status_code == 401
    assert response.json()["code"] == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_refresh_token_not_accepted_as_bearer(client: AsyncClient):
    pair = get_token_service().issue_token_pair(1, "alice", "user")

    response = await client.get(
        "/states", headers={"Authorization": f"Bearer {pair.refresh_token}"}
    )

    assert response.status_code == 401
    assert response.json()["code"] == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_machine_token_grants_admin(client: AsyncClient, monkeypatch):
    """Machine token

    Given MACHINE_TOKEN is configured
    When a caller presents it as a bearer token
    Then they act as the synthetic admin identity
    """
    monkeypatch.setattr(ApplicationConfig, "MACHINE_TOKEN", "machine-secret")
    headers = {"Authorization": "Bearer machine-secret"}

    response = await client.get("/auth/me", headers=headers)
    assert response.status_code == 200
    assert response.json()["id"] == 0
    assert response.json()["role"] == "admin"

    response = await client.get("/admin/users", headers=headers)
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_machine_token_checked_before_readiness(client: AsyncClient, monkeypatch):
    """Machine callers are served even while the token service is down"""
    monkeypatch.setattr(ApplicationConfig, "MACHINE_TOKEN", "machine-secret")
    reset_token_service()
    try:
        response = await client.get(
            "/states", headers={"Authorization": "Bearer machine-secret"}
        )
        assert response.status_code == 200

        response = await client.get("/states")
        assert response.status_code == 503
        assert response.json()["code"] == "AUTH_NOT_READY"
    finally:
        init_token_service(ApplicationConfig)


@pytest.mark.asyncio
async def test_machine_token_unset_is_never_accepted(client: AsyncClient, monkeypatch):
    monkeypatch.setattr(ApplicationConfig, "MACHINE_TOKEN", None)

    response = await client.get(
        "/states", headers={"Authorization": "Bearer machine-secret"}
    )

    assert response.status_code == 401
    assert response.json()["code"] == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_login_unavailable_without_token_service(client: AsyncClient, seed):
    await seed.user(username="alice", password="Secret123!")
    reset_token_service()
    try:
        response = await client.post(
            "/auth/login", json={"username": "alice", "password": "Secret123!"}
        )
        assert response.status_code == 503
        assert response.json()["code"] == "AUTH_NOT_READY"
    finally:
        init_token_service(ApplicationConfig)


@pytest.mark.asyncio
async def test_non_admin_forbidden(client: AsyncClient, user_headers):
    response = await client.get("/admin/users", headers=user_headers)

    assert response.status_code == 403
    assert response.json()["code"] == "FORBIDDEN"


@pytest.mark.asyncio
async def test_health_is_public(client: AsyncClient, engine, monkeypatch):
    monkeypatch.setattr("src.depends.engine", engine)

    response = await client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["database"] == "connected"
    assert data["type"] == "SQLite"
    assert "timestamp" in data
