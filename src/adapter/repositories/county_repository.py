from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.county_repository import ICountyRepository
from src.domain.entities import County


class CountyRepository(ICountyRepository):
    """County repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, county_id: int) -> Optional[County]:
        stmt = select(County).where(County.id == county_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_by_state(self, state: Optional[str] = None) -> List[County]:
        stmt = select(County)
        if state:
            stmt = stmt.where(County.state == state)
        stmt = stmt.order_by(
            County.state, func.coalesce(County.municipality_name, County.county_name)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def state_counts(self) -> List[Tuple[str, int]]:
        stmt = (
            select(County.state, func.count(County.id))
            .group_by(County.state)
            .order_by(County.state)
        )
        result = await self.session.exec(stmt)
        return [(state, count) for state, count in result.all()]
