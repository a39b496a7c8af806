from typing import List, Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.fee_repository import IFeeRepository
from src.domain.base import utcnow
from src.domain.entities import Fee


class FeeRepository(IFeeRepository):
    """Fee repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_by_research_id(self, research_id: int) -> List[Fee]:
        stmt = (
            select(Fee)
            .where(Fee.research_result_id == research_id)
            .order_by(Fee.fee_category, Fee.fee_number)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_by_id(self, fee_id: int) -> Optional[Fee]:
        stmt = select(Fee).where(Fee.id == fee_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, fee: Fee) -> Fee:
        self.session.add(fee)
        await self.session.flush()
        await self.session.refresh(fee)
        return fee

    async def update(self, fee: Fee) -> Fee:
        fee.updated_at = utcnow()
        self.session.add(fee)
        await self.session.flush()
        await self.session.refresh(fee)
        return fee

    async def delete(self, fee: Fee) -> None:
        await self.session.delete(fee)
        await self.session.flush()

    async def distinct_types(self) -> List[str]:
        stmt = (
            select(Fee.fee_type)
            .where(Fee.fee_type.is_not(None))
            .distinct()
            .order_by(Fee.fee_type)
        )
        result = await self.session.exec(stmt)
        return list(result.all())
