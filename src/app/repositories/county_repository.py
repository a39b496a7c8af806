from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from src.domain.entities import County


class ICountyRepository(ABC):
    """County repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, county_id: int) -> Optional[County]:
        pass

    @abstractmethod
    async def list_by_state(self, state: Optional[str] = None) -> List[County]:
        """All counties, optionally restricted to one state"""
        pass

    @abstractmethod
    async def state_counts(self) -> List[Tuple[str, int]]:
        """(state, jurisdiction count) pairs ordered by state"""
        pass
