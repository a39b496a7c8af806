from src.libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from .dtos import EditHistoryEntry, EditHistoryResponse


class GetEditHistoryUseCase:
    """Full audit trail of a research result, newest first, unpaginated"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, research_id: int) -> Result[EditHistoryResponse]:
        async with self.uow:
            entries = await self.uow.audit_trail.history(research_id)
            history = [EditHistoryEntry(**entry.model_dump()) for entry in entries]
            return Return.ok(
                EditHistoryResponse(
                    research_id=research_id,
                    edit_history=history,
                    total_edits=len(history),
                )
            )
