from typing import Iterable, List, Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.research_repository import IResearchRepository
from src.domain.base import utcnow
from src.domain.entities import ResearchResult, Screenshot, SourceData


class ResearchRepository(IResearchRepository):
    """ResearchResult repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, research_id: int) -> Optional[ResearchResult]:
        stmt = select(ResearchResult).where(ResearchResult.id == research_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_for_update(self, research_id: int) -> Optional[ResearchResult]:
        # FOR UPDATE is ignored by SQLite; PostgreSQL holds the row lock until commit
        stmt = (
            select(ResearchResult)
            .where(ResearchResult.id == research_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_by_county_ids(
        self, county_ids: Iterable[int]
    ) -> List[ResearchResult]:
        ids = list(county_ids)
        if not ids:
            return []
        stmt = (
            select(ResearchResult)
            .where(ResearchResult.county_id.in_(ids))
            .order_by(ResearchResult.research_date.desc(), ResearchResult.id.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def list_versions(self, county_id: int) -> List[ResearchResult]:
        stmt = (
            select(ResearchResult)
            .where(ResearchResult.county_id == county_id)
            .order_by(
                ResearchResult.research_date.desc(), ResearchResult.created_at.desc()
            )
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def update(self, research: ResearchResult) -> ResearchResult:
        research.updated_at = utcnow()
        self.session.add(research)
        await self.session.flush()
        await self.session.refresh(research)
        return research

    async def list_screenshots(self, research_id: int) -> List[Screenshot]:
        stmt = (
            select(Screenshot)
            .where(Screenshot.research_result_id == research_id)
            .order_by(Screenshot.created_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def list_source_data(self, research_id: int) -> List[SourceData]:
        stmt = (
            select(SourceData)
            .where(SourceData.research_result_id == research_id)
            .order_by(SourceData.created_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())
