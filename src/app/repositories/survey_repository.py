from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple

from src.domain.entities import (
    SurveyBatch,
    SurveyConfig,
    SurveyItemStatus,
    SurveyQueueItem,
)


class ISurveyConfigRepository(ABC):
    """SurveyConfig repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, config_id: int) -> Optional[SurveyConfig]:
        pass

    @abstractmethod
    async def list_all(self, include_inactive: bool = False) -> List[SurveyConfig]:
        pass

    @abstractmethod
    async def create(self, config: SurveyConfig) -> SurveyConfig:
        pass

    @abstractmethod
    async def update(self, config: SurveyConfig) -> SurveyConfig:
        pass


class ISurveyBatchRepository(ABC):
    """SurveyBatch repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, batch_id: int) -> Optional[SurveyBatch]:
        pass

    @abstractmethod
    async def list_all(self) -> List[SurveyBatch]:
        """All batches, newest first"""
        pass

    @abstractmethod
    async def create(self, batch: SurveyBatch) -> SurveyBatch:
        pass

    @abstractmethod
    async def delete(self, batch: SurveyBatch) -> None:
        """Delete the batch together with its queue items"""
        pass


class ISurveyQueueItemRepository(ABC):
    """SurveyQueueItem repository interface - application layer"""

    @abstractmethod
    async def get_by_unique_id(self, unique_id: str) -> Optional[SurveyQueueItem]:
        pass

    @abstractmethod
    async def get_for_update(self, item_id: int) -> Optional[SurveyQueueItem]:
        """Get an item and lock its row until the unit of work ends"""
        pass

    @abstractmethod
    async def get_by_unique_id_for_update(
        self, unique_id: str
    ) -> Optional[SurveyQueueItem]:
        """
        Get an item by its survey link and lock its row.

        A concurrent submission of the same link waits for the lock and then
        sees the item already completed.
        """
        pass

    @abstractmethod
    async def list_filtered(
        self,
        batch_id: Optional[int] = None,
        status: Optional[SurveyItemStatus] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[SurveyQueueItem], int]:
        """Returns (page of items ordered by id, total matching)"""
        pass

    @abstractmethod
    async def list_open_by_batch(self, batch_id: int) -> List[SurveyQueueItem]:
        """Items in the batch that are not completed or cancelled, row-locked"""
        pass

    @abstractmethod
    async def count_by_status(
        self, batch_id: Optional[int] = None
    ) -> Dict[str, int]:
        """Status value -> count, optionally for one batch"""
        pass

    @abstractmethod
    async def create(self, item: SurveyQueueItem) -> SurveyQueueItem:
        pass

    @abstractmethod
    async def update(self, item: SurveyQueueItem) -> SurveyQueueItem:
        pass
