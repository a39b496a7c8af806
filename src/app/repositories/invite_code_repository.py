from abc import ABC, abstractmethod
from typing import List, Optional

from src.domain.entities import InviteCode


class IInviteCodeRepository(ABC):
    """InviteCode repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, invite_id: int) -> Optional[InviteCode]:
        pass

    @abstractmethod
    async def get_by_code(self, code: str) -> Optional[InviteCode]:
        pass

    @abstractmethod
    async def get_by_code_for_update(self, code: str) -> Optional[InviteCode]:
        """
        Get an invite code and lock its row until the unit of work ends.

        Concurrent registrations on the same code queue behind the lock and
        then see the incremented uses_count.
        """
        pass

    @abstractmethod
    async def list_all(self) -> List[InviteCode]:
        """All codes, newest first"""
        pass

    @abstractmethod
    async def create(self, invite: InviteCode) -> InviteCode:
        pass

    @abstractmethod
    async def update(self, invite: InviteCode) -> InviteCode:
        pass
