from unittest.mock import AsyncMock, MagicMock

import pytest


@pytest.fixture
def mock_uow():
    """UnitOfWork double; entering yields itself and leaving never swallows errors"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


@pytest.fixture
def async_repo():
    """
    Build a repository double from coroutine method names.

    async_repo(get_by_code=invite, update=None) gives a mock whose
    get_by_code and update are AsyncMocks returning those values.
    """

    def build(**returns):
        repo = MagicMock()
        for name, value in returns.items():
            setattr(repo, name, AsyncMock(return_value=value))
        return repo

    return build
