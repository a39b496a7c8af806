from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from src.domain.entities import ResearchResult, Screenshot, SourceData


class IResearchRepository(ABC):
    """ResearchResult repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, research_id: int) -> Optional[ResearchResult]:
        pass

    @abstractmethod
    async def get_for_update(self, research_id: int) -> Optional[ResearchResult]:
        """
        Get research result and lock its row until the unit of work ends.

        Used so the value captured for the audit trail cannot change between
        the read and the update.
        """
        pass

    @abstractmethod
    async def list_by_county_ids(self, county_ids: Iterable[int]) -> List[ResearchResult]:
        """All versions for the given counties, newest research_date first"""
        pass

    @abstractmethod
    async def list_versions(self, county_id: int) -> List[ResearchResult]:
        """All versions for one county, newest first"""
        pass

    @abstractmethod
    async def update(self, research: ResearchResult) -> ResearchResult:
        pass

    @abstractmethod
    async def list_screenshots(self, research_id: int) -> List[Screenshot]:
        pass

    @abstractmethod
    async def list_source_data(self, research_id: int) -> List[SourceData]:
        pass
