from abc import ABC, abstractmethod
from typing import List, Optional

from src.domain.entities import Contact


class IContactRepository(ABC):
    """Contact repository interface - application layer"""

    @abstractmethod
    async def list_by_research_id(self, research_id: int) -> List[Contact]:
        """Contacts ordered by sort_order, then contact_type"""
        pass

    @abstractmethod
    async def get_by_id(self, contact_id: int) -> Optional[Contact]:
        pass

    @abstractmethod
    async def create(self, contact: Contact) -> Contact:
        pass

    @abstractmethod
    async def update(self, contact: Contact) -> Contact:
        pass

    @abstractmethod
    async def delete(self, contact: Contact) -> None:
        pass

    @abstractmethod
    async def set_sort_order(
        self, research_id: int, contact_id: int, sort_order: int
    ) -> int:
        """Set sort_order if the contact belongs to research_id. Returns rows updated."""
        pass

    @abstractmethod
    async def distinct_types(self) -> List[str]:
        """Distinct non-null contact types (unordered)"""
        pass
