from typing import List, Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.invite_code_repository import IInviteCodeRepository
from src.domain.entities import InviteCode


class InviteCodeRepository(IInviteCodeRepository):
    """InviteCode repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, invite_id: int) -> Optional[InviteCode]:
        stmt = select(InviteCode).where(InviteCode.id == invite_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_code(self, code: str) -> Optional[InviteCode]:
        stmt = select(InviteCode).where(InviteCode.code == code)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_code_for_update(self, code: str) -> Optional[InviteCode]:
        stmt = (
            select(InviteCode)
            .where(InviteCode.code == code)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_all(self) -> List[InviteCode]:
        stmt = select(InviteCode).order_by(InviteCode.created_at.desc())
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, invite: InviteCode) -> InviteCode:
        self.session.add(invite)
        await self.session.flush()
        await self.session.refresh(invite)
        return invite

    async def update(self, invite: InviteCode) -> InviteCode:
        self.session.add(invite)
        await self.session.flush()
        await self.session.refresh(invite)
        return invite
