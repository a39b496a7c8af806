"""
Contacts Use Case

Ordered contacts of a research result.
"""

from typing import Any, Dict, List

from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Contact
from src.domain.entities.contact import CONTACT_TYPE_ORDER
from .dtos import ContactData

RESEARCH_NOT_FOUND = Error("RESEARCH_NOT_FOUND", "Research result not found")
CONTACT_NOT_FOUND = Error("CONTACT_NOT_FOUND", "Contact not found")


def order_contact_types(types: List[str]) -> List[str]:
    """Known types in their fixed order, then the rest alphabetically"""
    rank = {name: i for i, name in enumerate(CONTACT_TYPE_ORDER)}
    return sorted(set(types), key=lambda t: (rank.get(t, len(rank)), t))


class ContactsUseCase:
    """
    Use case for the contacts table.

    Business Rules:
    - contact_type defaults to primary, sort_order to 0
    - Reorder assigns sort_order by list position and never touches
      contacts of another research result
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def list(self, research_id: int) -> Result[List[Dict[str, Any]]]:
        async with self.uow:
            if await self.uow.research.get_by_id(research_id) is None:
                return Return.err(RESEARCH_NOT_FOUND)
            contacts = await self.uow.contacts.list_by_research_id(research_id)
            return Return.ok([contact.model_dump() for contact in contacts])

    async def create(self, research_id: int, data: ContactData) -> Result[Dict[str, Any]]:
        async with self.uow:
            if await self.uow.research.get_by_id(research_id) is None:
                return Return.err(RESEARCH_NOT_FOUND)

            values = data.model_dump()
            values["contact_type"] = values["contact_type"] or "primary"
            values["sort_order"] = values["sort_order"] or 0
            contact = await self.uow.contacts.create(
                Contact(research_result_id=research_id, **values)
            )
            await self.uow.commit()
            return Return.ok(contact.model_dump())

    async def update(self, contact_id: int, data: ContactData) -> Result[Dict[str, Any]]:
        async with self.uow:
            contact = await self.uow.contacts.get_by_id(contact_id)
            if contact is None:
                return Return.err(CONTACT_NOT_FOUND)

            for key, value in data.model_dump(exclude_unset=True).items():
                if key == "contact_type" and not value:
                    value = "primary"
                if key == "sort_order" and value is None:
                    value = 0
                setattr(contact, key, value)
            contact = await self.uow.contacts.update(contact)
            await self.uow.commit()
            return Return.ok(contact.model_dump())

    async def delete(self, contact_id: int) -> Result[None]:
        async with self.uow:
            contact = await self.uow.contacts.get_by_id(contact_id)
            if contact is None:
                return Return.err(CONTACT_NOT_FOUND)

            await self.uow.contacts.delete(contact)
            await self.uow.commit()
            return Return.ok()

    async def reorder(self, research_id: int, ordered_ids: List[int]) -> Result[int]:
        """
        Set sort_order from each id's index in ordered_ids.

        Returns:
            Result with the number of contacts updated
        """
        async with self.uow:
            if await self.uow.research.get_by_id(research_id) is None:
                return Return.err(RESEARCH_NOT_FOUND)

            updated = 0
            for index, contact_id in enumerate(ordered_ids):
                updated += await self.uow.contacts.set_sort_order(
                    research_id, contact_id, index
                )
            await self.uow.commit()
            return Return.ok(updated)

    async def contact_types(self) -> Result[List[str]]:
        async with self.uow:
            types = await self.uow.contacts.distinct_types()
            return Return.ok(order_contact_types(types))
