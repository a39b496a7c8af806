from typing import Any, Dict, List

from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Fee
from .dtos import FeeData

RESEARCH_NOT_FOUND = Error("RESEARCH_NOT_FOUND", "Research result not found")
FEE_NOT_FOUND = Error("FEE_NOT_FOUND", "Fee not found")


class FeesUseCase:
    """
    Use case for the fees table.

    fee_category defaults to delq and fee_number to 1.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def list(self, research_id: int) -> Result[List[Dict[str, Any]]]:
        async with self.uow:
            if await self.uow.research.get_by_id(research_id) is None:
                return Return.err(RESEARCH_NOT_FOUND)
            fees = await self.uow.fees.list_by_research_id(research_id)
            return Return.ok([fee.model_dump() for fee in fees])

    async def create(self, research_id: int, data: FeeData) -> Result[Dict[str, Any]]:
        async with self.uow:
            if await self.uow.research.get_by_id(research_id) is None:
                return Return.err(RESEARCH_NOT_FOUND)

            values = data.model_dump()
            values["fee_category"] = values["fee_category"] or "delq"
            values["fee_number"] = values["fee_number"] or 1
            fee = await self.uow.fees.create(Fee(research_result_id=research_id, **values))
            await self.uow.commit()
            return Return.ok(fee.model_dump())

    async def update(self, fee_id: int, data: FeeData) -> Result[Dict[str, Any]]:
        async with self.uow:
            fee = await self.uow.fees.get_by_id(fee_id)
            if fee is None:
                return Return.err(FEE_NOT_FOUND)

            for key, value in data.model_dump(exclude_unset=True).items():
                if key == "fee_category" and not value:
                    value = "delq"
                if key == "fee_number" and not value:
                    value = 1
                setattr(fee, key, value)
            fee = await self.uow.fees.update(fee)
            await self.uow.commit()
            return Return.ok(fee.model_dump())

    async def delete(self, fee_id: int) -> Result[None]:
        async with self.uow:
            fee = await self.uow.fees.get_by_id(fee_id)
            if fee is None:
                return Return.err(FEE_NOT_FOUND)

            await self.uow.fees.delete(fee)
            await self.uow.commit()
            return Return.ok()

    async def fee_types(self) -> Result[List[str]]:
        async with self.uow:
            return Return.ok(await self.uow.fees.distinct_types())
