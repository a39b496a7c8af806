from typing import Dict, List, Optional, Tuple

from sqlalchemy import delete, func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.survey_repository import (
    ISurveyBatchRepository,
    ISurveyConfigRepository,
    ISurveyQueueItemRepository,
)
from src.domain.base import utcnow
from src.domain.entities import (
    SurveyBatch,
    SurveyConfig,
    SurveyItemStatus,
    SurveyQueueItem,
)

OPEN_STATUSES = (SurveyItemStatus.pending, SurveyItemStatus.sent)


class SurveyConfigRepository(ISurveyConfigRepository):
    """SurveyConfig repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, config_id: int) -> Optional[SurveyConfig]:
        stmt = select(SurveyConfig).where(SurveyConfig.id == config_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_all(self, include_inactive: bool = False) -> List[SurveyConfig]:
        stmt = select(SurveyConfig)
        if not include_inactive:
            stmt = stmt.where(SurveyConfig.is_active == True)
        stmt = stmt.order_by(SurveyConfig.name)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, config: SurveyConfig) -> SurveyConfig:
        self.session.add(config)
        await self.session.flush()
        await self.session.refresh(config)
        return config

    async def update(self, config: SurveyConfig) -> SurveyConfig:
        config.updated_at = utcnow()
        self.session.add(config)
        await self.session.flush()
        await self.session.refresh(config)
        return config


class SurveyBatchRepository(ISurveyBatchRepository):
    """SurveyBatch repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, batch_id: int) -> Optional[SurveyBatch]:
        stmt = select(SurveyBatch).where(SurveyBatch.id == batch_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_all(self) -> List[SurveyBatch]:
        stmt = select(SurveyBatch).order_by(
            SurveyBatch.created_at.desc(), SurveyBatch.id.desc()
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, batch: SurveyBatch) -> SurveyBatch:
        self.session.add(batch)
        await self.session.flush()
        await self.session.refresh(batch)
        return batch

    async def delete(self, batch: SurveyBatch) -> None:
        await self.session.execute(
            delete(SurveyQueueItem).where(SurveyQueueItem.batch_id == batch.id)
        )
        await self.session.delete(batch)
        await self.session.flush()


class SurveyQueueItemRepository(ISurveyQueueItemRepository):
    """SurveyQueueItem repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_unique_id(self, unique_id: str) -> Optional[SurveyQueueItem]:
        stmt = select(SurveyQueueItem).where(SurveyQueueItem.unique_id == unique_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_for_update(self, item_id: int) -> Optional[SurveyQueueItem]:
        stmt = (
            select(SurveyQueueItem)
            .where(SurveyQueueItem.id == item_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_unique_id_for_update(
        self, unique_id: str
    ) -> Optional[SurveyQueueItem]:
        stmt = (
            select(SurveyQueueItem)
            .where(SurveyQueueItem.unique_id == unique_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_filtered(
        self,
        batch_id: Optional[int] = None,
        status: Optional[SurveyItemStatus] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[SurveyQueueItem], int]:
        conditions = []
        if batch_id is not None:
            conditions.append(SurveyQueueItem.batch_id == batch_id)
        if status is not None:
            conditions.append(SurveyQueueItem.status == status)

        count_stmt = select(func.count(SurveyQueueItem.id)).where(*conditions)
        total = (await self.session.exec(count_stmt)).one()

        stmt = (
            select(SurveyQueueItem)
            .where(*conditions)
            .order_by(SurveyQueueItem.id)
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.exec(stmt)
        return list(result.all()), total

    async def list_open_by_batch(self, batch_id: int) -> List[SurveyQueueItem]:
        stmt = (
            select(SurveyQueueItem)
            .where(
                SurveyQueueItem.batch_id == batch_id,
                SurveyQueueItem.status.in_(OPEN_STATUSES),
            )
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count_by_status(self, batch_id: Optional[int] = None) -> Dict[str, int]:
        stmt = select(SurveyQueueItem.status, func.count(SurveyQueueItem.id))
        if batch_id is not None:
            stmt = stmt.where(SurveyQueueItem.batch_id == batch_id)
        stmt = stmt.group_by(SurveyQueueItem.status)
        result = await self.session.exec(stmt)
        counts = {status.value: 0 for status in SurveyItemStatus}
        for status, count in result.all():
            counts[SurveyItemStatus(status).value] = count
        return counts

    async def create(self, item: SurveyQueueItem) -> SurveyQueueItem:
        self.session.add(item)
        await self.session.flush()
        await self.session.refresh(item)
        return item

    async def update(self, item: SurveyQueueItem) -> SurveyQueueItem:
        item.updated_at = utcnow()
        self.session.add(item)
        await self.session.flush()
        await self.session.refresh(item)
        return item
