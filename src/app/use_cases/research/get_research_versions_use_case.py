from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from .dtos import VersionsResponse


class GetResearchVersionsUseCase:
    """
    Use case for listing every research version of a jurisdiction.

    Business Rules:
    - Resolved from any one version's id
    - Newest research_date first
    - Each version carries its own edit_count and last_edit_date
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, research_id: int) -> Result[VersionsResponse]:
        async with self.uow:
            current = await self.uow.research.get_by_id(research_id)
            if current is None:
                return Return.err(
                    Error("RESEARCH_NOT_FOUND", "Research result not found")
                )

            versions = await self.uow.research.list_versions(current.county_id)
            stats = await self.uow.audit_trail.edit_stats(v.id for v in versions)

            rows = []
            for version in versions:
                edit_count, last_edit_date = stats.get(version.id, (0, None))
                row = version.model_dump()
                row["edit_count"] = edit_count
                row["last_edit_date"] = last_edit_date
                rows.append(row)

            return Return.ok(
                VersionsResponse(
                    current_research_id=research_id,
                    county_id=current.county_id,
                    versions=rows,
                    total_versions=len(rows),
                )
            )
