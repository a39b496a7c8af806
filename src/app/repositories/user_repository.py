from abc import ABC, abstractmethod
from typing import List, Optional

from src.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def get_by_username_or_email(self, identifier: str) -> Optional[User]:
        """Get user whose username or email equals identifier"""
        pass

    @abstractmethod
    async def exists_username_or_email(self, username: str, email: str) -> bool:
        """True if any user already has this username or this email"""
        pass

    @abstractmethod
    async def list_all(self) -> List[User]:
        """All users, ordered by username"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass
