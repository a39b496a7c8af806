"""
Installments Use Case

Per-installment collection details of a research result.
"""

import logging
from typing import Any, Dict, List

from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Installment
from src.domain.entities.installment import MAX_INSTALLMENT_NUMBER, MIN_INSTALLMENT_NUMBER
from .dtos import InstallmentData, NewInstallmentData

logger = logging.getLogger(__name__)

INVALID_NUMBER = Error(
    "INVALID_INSTALLMENT_NUMBER",
    f"Installment number must be between {MIN_INSTALLMENT_NUMBER} and {MAX_INSTALLMENT_NUMBER}",
)
RESEARCH_NOT_FOUND = Error("RESEARCH_NOT_FOUND", "Research result not found")
INSTALLMENT_NOT_FOUND = Error("INSTALLMENT_NOT_FOUND", "Installment not found")


def _valid_number(number: int) -> bool:
    return MIN_INSTALLMENT_NUMBER <= number <= MAX_INSTALLMENT_NUMBER


class InstallmentsUseCase:
    """
    Use case for the installments table.

    Business Rules:
    - installment_number must be 1..10 (checked before any lookup)
    - One installment per number per research result
    - Rows of a missing research result are reported as not found
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def list(self, research_id: int) -> Result[List[Dict[str, Any]]]:
        async with self.uow:
            if await self.uow.research.get_by_id(research_id) is None:
                return Return.err(RESEARCH_NOT_FOUND)
            installments = await self.uow.installments.list_by_research_id(research_id)
            return Return.ok([i.model_dump() for i in installments])

    async def create(self, research_id: int, data: NewInstallmentData) -> Result[Dict[str, Any]]:
        if not _valid_number(data.installment_number):
            return Return.err(INVALID_NUMBER)

        async with self.uow:
            if await self.uow.research.get_by_id(research_id) is None:
                return Return.err(RESEARCH_NOT_FOUND)

            existing = await self.uow.installments.get_by_number(
                research_id, data.installment_number
            )
            if existing is not None:
                return Return.err(
                    Error(
                        "INSTALLMENT_EXISTS",
                        f"Installment {data.installment_number} already exists",
                    )
                )

            installment = Installment(research_result_id=research_id, **data.model_dump())
            installment = await self.uow.installments.create(installment)
            await self.uow.commit()
            return Return.ok(installment.model_dump())

    async def update(self, installment_id: int, data: InstallmentData) -> Result[Dict[str, Any]]:
        async with self.uow:
            installment = await self.uow.installments.get_by_id(installment_id)
            if installment is None:
                return Return.err(INSTALLMENT_NOT_FOUND)

            for key, value in data.model_dump(exclude_unset=True).items():
                setattr(installment, key, value)
            installment = await self.uow.installments.update(installment)
            await self.uow.commit()
            return Return.ok(installment.model_dump())

    async def delete(self, installment_id: int) -> Result[None]:
        async with self.uow:
            installment = await self.uow.installments.get_by_id(installment_id)
            if installment is None:
                return Return.err(INSTALLMENT_NOT_FOUND)

            await self.uow.installments.delete(installment)
            await self.uow.commit()
            return Return.ok()

    async def upsert_by_number(
        self, research_id: int, number: int, data: InstallmentData
    ) -> Result[Dict[str, Any]]:
        """Create or update the installment with this number"""
        if not _valid_number(number):
            return Return.err(INVALID_NUMBER)

        async with self.uow:
            if await self.uow.research.get_by_id(research_id) is None:
                return Return.err(RESEARCH_NOT_FOUND)

            installment = await self.uow.installments.get_by_number(research_id, number)
            if installment is None:
                installment = Installment(
                    research_result_id=research_id,
                    installment_number=number,
                    **data.model_dump(),
                )
                installment = await self.uow.installments.create(installment)
            else:
                for key, value in data.model_dump(exclude_unset=True).items():
                    setattr(installment, key, value)
                installment = await self.uow.installments.update(installment)

            await self.uow.commit()
            logger.info(f"Installment {number} of research {research_id} saved")
            return Return.ok(installment.model_dump())

    async def delete_by_number(self, research_id: int, number: int) -> Result[None]:
        if not _valid_number(number):
            return Return.err(INVALID_NUMBER)

        async with self.uow:
            installment = await self.uow.installments.get_by_number(research_id, number)
            if installment is None:
                return Return.err(INSTALLMENT_NOT_FOUND)

            await self.uow.installments.delete(installment)
            await self.uow.commit()
            return Return.ok()
