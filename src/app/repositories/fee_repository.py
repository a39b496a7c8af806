from abc import ABC, abstractmethod
from typing import List, Optional

from src.domain.entities import Fee


class IFeeRepository(ABC):
    """Fee repository interface - application layer"""

    @abstractmethod
    async def list_by_research_id(self, research_id: int) -> List[Fee]:
        """Fees ordered by fee_category, then fee_number"""
        pass

    @abstractmethod
    async def get_by_id(self, fee_id: int) -> Optional[Fee]:
        pass

    @abstractmethod
    async def create(self, fee: Fee) -> Fee:
        pass

    @abstractmethod
    async def update(self, fee: Fee) -> Fee:
        pass

    @abstractmethod
    async def delete(self, fee: Fee) -> None:
        pass

    @abstractmethod
    async def distinct_types(self) -> List[str]:
        """Distinct non-null fee types, sorted"""
        pass
