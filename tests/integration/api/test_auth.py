from datetime import timedelta

import pytest
from httpx import AsyncClient
from sqlmodel import select

from src.domain.base import utcnow
from src.domain.entities import InviteCode, Session, UserRole


@pytest.mark.asyncio
async def test_register_with_invite_code(client: AsyncClient, seed, db_session):
    """Successful registration

    Given an active single-use invite code
    When I register with it
    Then a user with role=user is created
    And the invite usage is recorded
    """
    invite_id = await seed.invite_code(code="JOIN2024")

    response = await client.post("/auth/register", json={
        "username": "newbie",
        "email": "newbie@example.com",
        "password": "Secret123!",
        "firstName": "New",
        "inviteCode": "JOIN2024",
    })

    assert response.status_code == 201
    data = response.json()
    assert data["success"] is True
    assert data["message"] == "Registration successful"
    assert data["user"]["username"] == "newbie"
    assert data["user"]["role"] == "user"
    user_id = data["user"]["id"]

    invite = (
        await db_session.exec(select(InviteCode).where(InviteCode.id == invite_id))
    ).first()
    await db_session.refresh(invite)
    assert invite.uses_count == 1
    assert invite.used_by == user_id


@pytest.mark.asyncio
async def test_register_invite_exhausted(client: AsyncClient, seed):
    """Exhausted invite

    Given an invite code already used up
    When I register with it
    Then the request fails with 400 INVALID_INVITE_CODE
    """
    await seed.invite_code(code="USEDUP01", max_uses=1, uses_count=1)

    response = await client.post("/auth/register", json={
        "username": "late",
        "email": "late@example.com",
        "password": "Secret123!",
        "inviteCode": "USEDUP01",
    })

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_INVITE_CODE"


@pytest.mark.asyncio
async def test_register_expired_invite(client: AsyncClient, seed):
    await seed.invite_code(code="EXPIRED1", expires_at=utcnow() - timedelta(days=1))

    response = await client.post("/auth/register", json={
        "username": "late",
        "email": "late@example.com",
        "password": "Secret123!",
        "inviteCode": "EXPIRED1",
    })

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_INVITE_CODE"


@pytest.mark.asyncio
async def test_register_invite_bound_to_other_email(client: AsyncClient, seed):
    """Email-bound invite

    Given an invite code bound to one email
    When someone registers with a different email
    Then the request fails with 400 INVITE_EMAIL_MISMATCH
    """
    await seed.invite_code(code="BOUND001", email="Owner@Example.com")

    response = await client.post("/auth/register", json={
        "username": "intruder",
        "email": "intruder@example.com",
        "password": "Secret123!",
        "inviteCode": "BOUND001",
    })

    assert response.status_code == 400
    assert response.json()["code"] == "INVITE_EMAIL_MISMATCH"

    # Matching is case-insensitive
    response = await client.post("/auth/register", json={
        "username": "owner",
        "email": "owner@example.com",
        "password": "Secret123!",
        "inviteCode": "BOUND001",
    })
    assert response.status_code == 201


@pytest.mark.asyncio
async def test_register_duplicate_username(client: AsyncClient, seed):
    await seed.user(username="taken")
    await seed.invite_code(code="MULTI001", max_uses=5)

    response = await client.post("/auth/register", json={
        "username": "taken",
        "email": "fresh@example.com",
        "password": "Secret123!",
        "inviteCode": "MULTI001",
    })

    assert response.status_code == 400
    assert response.json()["code"] == "USER_ALREADY_EXISTS"


@pytest.mark.asyncio
async def test_register_validation_error(client: AsyncClient):
    response = await client.post("/auth/register", json={"username": "incomplete"})

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_login_with_username_and_email(client: AsyncClient, seed, db_session):
    """Successful login

    Given an active user
    When I log in with username, or with email
    Then I receive an access and refresh token pair
    And a session is recorded with the client IP and user agent
    """
    user = await seed.user(username="alice", password="Secret123!")

    response = await client.post(
        "/auth/login",
        json={"username": "alice", "password": "Secret123!"},
        headers={"X-Forwarded-For": "203.0.113.9, 10.0.0.1", "User-Agent": "pytest"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["user"]["id"] == user["id"]
    assert data["user"]["role"] == "user"
    assert data["accessToken"]
    assert data["refreshToken"]

    sessions = (
        await db_session.exec(select(Session).where(Session.user_id == user["id"]))
    ).all()
    assert len(sessions) == 1
    assert sessions[0].ip_address == "203.0.113.9"
    assert sessions[0].user_agent == "pytest"
    assert sessions[0].refresh_token_hash != data["refreshToken"]

    response = await client.post(
        "/auth/login", json={"username": "alice@example.com", "password": "Secret123!"}
    )
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_login_invalid_credentials(client: AsyncClient, seed):
    """Wrong password and unknown user give the same 401"""
    await seed.user(username="alice", password="Secret123!")

    wrong_password = await client.post(
        "/auth/login", json={"username": "alice", "password": "nope"}
    )
    unknown_user = await client.post(
        "/auth/login", json={"username": "ghost", "password": "nope"}
    )

    assert wrong_password.status_code == 401
    assert unknown_user.status_code == 401
    assert wrong_password.json() == unknown_user.json()
    assert wrong_password.json() == {
        "error": "Invalid username or password",
        "code": "INVALID_CREDENTIALS",
    }


@pytest.mark.asyncio
async def test_login_response_uses_camel_case_keys(client: AsyncClient, seed):
    await seed.user(username="alice", password="Secret123!")

    response = await client.post(
        "/auth/login", json={"username": "alice", "password": "Secret123!"}
    )

    assert sorted(response.json()) == ["accessToken", "refreshToken", "success", "user"]
    assert sorted(response.json()["user"]) == ["email", "id", "role", "username"]


@pytest.mark.asyncio
async def test_login_disabled_user(client: AsyncClient, seed):
    """Disabled account

    Given a deactivated user
    When they log in with the correct password
    Then the request fails with 401 "Account is disabled"
    But a wrong password still reports the generic credentials error
    """
    await seed.user(username="gone", password="Secret123!", is_active=False)

    response = await client.post(
        "/auth/login", json={"username": "gone", "password": "Secret123!"}
    )
    assert response.status_code == 401
    assert response.json() == {"error": "Account is disabled", "code": "USER_DISABLED"}

    response = await client.post(
        "/auth/login", json={"username": "gone", "password": "wrong"}
    )
    assert response.status_code == 401
    assert response.json()["error"] == "Invalid username or password"


@pytest.mark.asyncio
async def test_refresh_and_logout(client: AsyncClient, seed):
    """Refresh lifecycle

    Given a logged in user
    When they refresh, they get a new access token
    And after logout the same refresh token is rejected
    """
    await seed.user(username="alice", password="Secret123!")
    login = await client.post(
        "/auth/login", json={"username": "alice", "password": "Secret123!"}
    )
    refresh_token = login.json()["refreshToken"]

    response = await client.post("/auth/refresh", json={"refreshToken": refresh_token})
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["user"]["username"] == "alice"
    new_access = data["accessToken"]

    me = await client.get("/auth/me", headers={"Authorization": f"Bearer {new_access}"})
    assert me.status_code == 200

    response = await client.post("/auth/logout", json={"refreshToken": refresh_token})
    assert response.status_code == 200
    assert response.json() == {"success": True}

    response = await client.post("/auth/refresh", json={"refreshToken": refresh_token})
    assert response.status_code == 401
    assert response.json()["code"] == "SESSION_NOT_FOUND"


@pytest.mark.asyncio
async def test_refresh_rejects_access_token(client: AsyncClient, seed):
    await seed.user(username="alice", password="Secret123!")
    login = await client.post(
        "/auth/login", json={"username": "alice", "password": "Secret123!"}
    )

    response = await client.post(
        "/auth/refresh", json={"refreshToken": login.json()["accessToken"]}
    )

    assert response.status_code == 401
    assert response.json()["code"] == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_refresh_rejects_expired_session(client: AsyncClient, seed, db_session):
    """Expired session

    Given a logged in user whose session has passed its expiry
    When they refresh with a refresh token whose signature is still valid
    Then the request fails with 401 SESSION_NOT_FOUND
    """
    user = await seed.user(username="alice", password="Secret123!")
    login = await client.post(
        "/auth/login", json={"username": "alice", "password": "Secret123!"}
    )
    refresh_token = login.json()["refreshToken"]

    session = (
        await db_session.exec(select(Session).where(Session.user_id == user["id"]))
    ).one()
    session.expires_at = utcnow() - timedelta(minutes=1)
    db_session.add(session)
    await db_session.commit()

    response = await client.post("/auth/refresh", json={"refreshToken": refresh_token})

    assert response.status_code == 401
    assert response.json()["code"] == "SESSION_NOT_FOUND"


@pytest.mark.asyncio
async def test_logout_twice_succeeds(client: AsyncClient, seed):
    await seed.user(username="alice", password="Secret123!")
    login = await client.post(
        "/auth/login", json={"username": "alice", "password": "Secret123!"}
    )
    refresh_token = login.json()["refreshToken"]

    first = await client.post("/auth/logout", json={"refreshToken": refresh_token})
    second = await client.post("/auth/logout", json={"refreshToken": refresh_token})

    assert first.status_code == 200
    assert second.status_code == 200
    assert first.json() == second.json() == {"success": True}


@pytest.mark.asyncio
async def test_logout_unknown_token_is_noop(client: AsyncClient):
    response = await client.post("/auth/logout", json={"refreshToken": "not-a-token"})

    assert response.status_code == 200
    assert response.json()["success"] is True


@pytest.mark.asyncio
async def test_refresh_requires_token(client: AsyncClient):
    response = await client.post("/auth/refresh", json={})

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"
    assert "refreshToken" in response.json()["error"]


@pytest.mark.asyncio
async def test_me_returns_profile(client: AsyncClient, seed):
    await seed.user(username="alice", password="Secret123!")
    login = await client.post(
        "/auth/login", json={"username": "alice", "password": "Secret123!"}
    )

    response = await client.get(
        "/auth/me", headers={"Authorization": f"Bearer {login.json()['accessToken']}"}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["username"] == "alice"
    assert data["email"] == "alice@example.com"
    assert data["role"] == "user"
    assert data["last_login"] is not None


@pytest.mark.asyncio
async def test_me_with_refresh_token_rejected(client: AsyncClient, seed):
    await seed.user(username="alice", password="Secret123!")
    login = await client.post(
        "/auth/login", json={"username": "alice", "password": "Secret123!"}
    )

    response = await client.get(
        "/auth/me", headers={"Authorization": f"Bearer {login.json()['refreshToken']}"}
    )

    assert response.status_code == 401
    assert response.json()["code"] == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_admin_role_in_token(client: AsyncClient, seed):
    await seed.user(username="boss", password="Secret123!", role=UserRole.admin)

    response = await client.post(
        "/auth/login", json={"username": "boss", "password": "Secret123!"}
    )

    assert response.json()["user"]["role"] == "admin"
