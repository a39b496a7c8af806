from typing import List, Optional

from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.contact_repository import IContactRepository
from src.domain.base import utcnow
from src.domain.entities import Contact


class ContactRepository(IContactRepository):
    """Contact repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_by_research_id(self, research_id: int) -> List[Contact]:
        stmt = (
            select(Contact)
            .where(Contact.research_result_id == research_id)
            .order_by(Contact.sort_order, Contact.contact_type)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_by_id(self, contact_id: int) -> Optional[Contact]:
        stmt = select(Contact).where(Contact.id == contact_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, contact: Contact) -> Contact:
        self.session.add(contact)
        await self.session.flush()
        await self.session.refresh(contact)
        return contact

    async def update(self, contact: Contact) -> Contact:
        contact.updated_at = utcnow()
        self.session.add(contact)
        await self.session.flush()
        await self.session.refresh(contact)
        return contact

    async def delete(self, contact: Contact) -> None:
        await self.session.delete(contact)
        await self.session.flush()

    async def set_sort_order(
        self, research_id: int, contact_id: int, sort_order: int
    ) -> int:
        stmt = (
            update(Contact)
            .where(Contact.id == contact_id, Contact.research_result_id == research_id)
            .values(sort_order=sort_order)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def distinct_types(self) -> List[str]:
        stmt = select(Contact.contact_type).where(Contact.contact_type.is_not(None)).distinct()
        result = await self.session.exec(stmt)
        return list(result.all())
