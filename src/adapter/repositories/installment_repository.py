from typing import List, Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.installment_repository import IInstallmentRepository
from src.domain.base import utcnow
from src.domain.entities import Installment


class InstallmentRepository(IInstallmentRepository):
    """Installment repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_by_research_id(self, research_id: int) -> List[Installment]:
        stmt = (
            select(Installment)
            .where(Installment.research_result_id == research_id)
            .order_by(Installment.installment_number)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_by_id(self, installment_id: int) -> Optional[Installment]:
        stmt = select(Installment).where(Installment.id == installment_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_number(
        self, research_id: int, installment_number: int
    ) -> Optional[Installment]:
        stmt = select(Installment).where(
            Installment.research_result_id == research_id,
            Installment.installment_number == installment_number,
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, installment: Installment) -> Installment:
        self.session.add(installment)
        await self.session.flush()
        await self.session.refresh(installment)
        return installment

    async def update(self, installment: Installment) -> Installment:
        installment.updated_at = utcnow()
        self.session.add(installment)
        await self.session.flush()
        await self.session.refresh(installment)
        return installment

    async def delete(self, installment: Installment) -> None:
        await self.session.delete(installment)
        await self.session.flush()
