from typing import Any, Dict, List

from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from .dtos import ResearchResponse
from .serializers import research_with_county


class GetResearchUseCase:
    """
    Use case for reading one research result and its evidence.

    Evidence (screenshots, source data) is listed newest first and is empty
    rather than missing for unknown ids.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, research_id: int) -> Result[ResearchResponse]:
        async with self.uow:
            research = await self.uow.research.get_by_id(research_id)
            if research is None:
                return Return.err(
                    Error("RESEARCH_NOT_FOUND", "Research result not found")
                )

            county = await self.uow.counties.get_by_id(research.county_id)
            if county is None:
                return Return.err(Error("COUNTY_NOT_FOUND", "County not found"))

            row = research_with_county(research, county)
            # Switching versions in the dashboard keys on the research id
            row["id"] = research.id
            return Return.ok(ResearchResponse(research=row))

    async def screenshots(self, research_id: int) -> Result[List[Dict[str, Any]]]:
        async with self.uow:
            rows = await self.uow.research.list_screenshots(research_id)
            return Return.ok([row.model_dump() for row in rows])

    async def source_data(self, research_id: int) -> Result[List[Dict[str, Any]]]:
        async with self.uow:
            rows = await self.uow.research.list_source_data(research_id)
            return Return.ok([row.model_dump() for row in rows])
