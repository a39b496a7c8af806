from unittest.mock import AsyncMock, MagicMock

import pytest

from src.app.services.token_service import TokenService
from src.app.use_cases.auth import RefreshTokenUseCase
from src.domain.entities import Session, User, UserRole
from src.domain.base import utcnow


@pytest.fixture
def token_service():
    return TokenService("unit-test-secret")


@pytest.fixture
def mock_uow(mock_uow):
    mock_uow.sessions = MagicMock()
    mock_uow.sessions.find_active_session = AsyncMock()
    mock_uow.sessions.touch = AsyncMock()

    mock_uow.users = MagicMock()
    mock_uow.users.get_by_id = AsyncMock()
    return mock_uow


def _session():
    return Session(id=3, user_id=7, refresh_token_hash="x" * 64, expires_at=utcnow())


def _user(is_active=True):
    return User(
        id=7,
        username="alice",
        email="alice@example.com",
        password_hash="hash",
        role=UserRole.admin,
        is_active=is_active,
    )


@pytest.mark.asyncio
async def test_refresh_issues_access_token(mock_uow, token_service):
    pair = token_service.issue_token_pair(7, "alice", "admin")
    mock_uow.sessions.find_active_session.return_value = _session()
    mock_uow.users.get_by_id.return_value = _user()

    result = await RefreshTokenUseCase(mock_uow, token_service).execute(pair.refresh_token)

    assert result.is_ok()
    claims = token_service.verify(result.value.access_token)
    assert claims["user_id"] == 7
    assert claims["role"] == "admin"
    assert "type" not in claims
    mock_uow.sessions.find_active_session.assert_called_once_with(pair.refresh_token)
    mock_uow.sessions.touch.assert_called_once_with(3)
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_access_token_is_not_a_refresh_token(mock_uow, token_service):
    pair = token_service.issue_token_pair(7, "alice", "admin")

    result = await RefreshTokenUseCase(mock_uow, token_service).execute(pair.access_token)

    assert result.error.code == "INVALID_TOKEN"
    mock_uow.sessions.find_active_session.assert_not_called()


@pytest.mark.asyncio
async def test_revoked_session(mock_uow, token_service):
    pair = token_service.issue_token_pair(7, "alice", "admin")
    mock_uow.sessions.find_active_session.return_value = None

    result = await RefreshTokenUseCase(mock_uow, token_service).execute(pair.refresh_token)

    assert result.error.code == "SESSION_NOT_FOUND"


@pytest.mark.asyncio
async def test_disabled_user(mock_uow, token_service):
    pair = token_service.issue_token_pair(7, "alice", "admin")
    mock_uow.sessions.find_active_session.return_value = _session()
    mock_uow.users.get_by_id.return_value = _user(is_active=False)

    result = await RefreshTokenUseCase(mock_uow, token_service).execute(pair.refresh_token)

    assert result.error.code == "USER_DISABLED"
    mock_uow.commit.assert_not_called()
