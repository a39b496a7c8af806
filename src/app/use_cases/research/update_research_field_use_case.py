"""
Update Research Field Use Case

Applies a single-field edit to a research result and records it in the
audit trail.
"""

import logging

from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from .dtos import UpdateFieldCommand, UpdateFieldResponse
from .editable_fields import apply_field_edit, is_editable

logger = logging.getLogger(__name__)


class UpdateResearchFieldUseCase:
    """
    Use case for editing one research field.

    Business Rules:
    - Only fields in the editable allow-list can change
    - Empty strings on date fields clear the value
    - M/D/YY due dates are stored as YYYY-MM-DD
    - num_installments must be 1..10, current_tax_year an integer
    - The row is locked while the old value is read, so the audit entry,
      the update and the lock release commit together
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: UpdateFieldCommand) -> Result[UpdateFieldResponse]:
        """
        Execute update research field use case.

        Args:
            command: UpdateFieldCommand with the edit and the editor's identity

        Returns:
            Result with UpdateFieldResponse, or Error
            (INVALID_FIELD, RESEARCH_NOT_FOUND, INVALID_VALUE)
        """
        if not is_editable(command.field):
            return Return.err(Error("INVALID_FIELD", "Invalid field name"))

        async with self.uow:
            research = await self.uow.research.get_for_update(command.research_id)
            if research is None:
                return Return.err(
                    Error("RESEARCH_NOT_FOUND", "Research result not found")
                )

            result = await apply_field_edit(
                self.uow,
                research,
                command.field,
                command.value,
                user_id=command.user_id,
                username=command.username,
                ip_address=command.ip_address,
                user_agent=command.user_agent,
                edit_reason=command.edit_reason,
            )
            if result.is_err():
                return Return.err(result.error)

            await self.uow.commit()

            logger.info(
                f"Research {command.research_id} field {command.field} "
                f"updated by {command.username}"
            )
            return Return.ok(UpdateFieldResponse())
