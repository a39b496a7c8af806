from abc import ABC, abstractmethod
from typing import List, Optional

from src.domain.entities import Installment


class IInstallmentRepository(ABC):
    """Installment repository interface - application layer"""

    @abstractmethod
    async def list_by_research_id(self, research_id: int) -> List[Installment]:
        """Installments ordered by installment_number"""
        pass

    @abstractmethod
    async def get_by_id(self, installment_id: int) -> Optional[Installment]:
        pass

    @abstractmethod
    async def get_by_number(
        self, research_id: int, installment_number: int
    ) -> Optional[Installment]:
        pass

    @abstractmethod
    async def create(self, installment: Installment) -> Installment:
        pass

    @abstractmethod
    async def update(self, installment: Installment) -> Installment:
        pass

    @abstractmethod
    async def delete(self, installment: Installment) -> None:
        pass
