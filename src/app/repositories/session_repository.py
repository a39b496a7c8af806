from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities import Session


class ISessionRepository(ABC):
    """Session registry interface - application layer"""

    @abstractmethod
    async def create_session(
        self,
        user_id: int,
        refresh_token: str,
        ip_address: Optional[str],
        user_agent: Optional[str],
    ) -> Session:
        """Persist a refresh session expiring a fixed interval from now"""
        pass

    @abstractmethod
    async def find_active_session(self, refresh_token: str) -> Optional[Session]:
        """Session for this exact token that is active and unexpired"""
        pass

    @abstractmethod
    async def touch(self, session_id: int) -> None:
        """Set last_activity to now"""
        pass

    @abstractmethod
    async def revoke(self, refresh_token: str) -> None:
        """Deactivate the session for this token. Unknown tokens are a no-op."""
        pass

    @abstractmethod
    async def revoke_all_by_user_id(self, user_id: int) -> int:
        """Deactivate all active sessions for a user. Returns count revoked."""
        pass
