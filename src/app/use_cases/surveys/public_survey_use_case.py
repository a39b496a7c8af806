"""
Public Survey Use Case

The unauthenticated survey form reached through an item's unique link,
and the write-back of its answers into research data.
"""

import logging
from typing import Any, Dict, Optional

from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.research.editable_fields import apply_field_edit, is_editable
from src.domain.base import utcnow
from src.domain.entities import SurveyItemStatus
from .dtos import PublicSurvey, SubmitSurveyResponse
from .survey_queue_use_case import closed_item_error

logger = logging.getLogger(__name__)

SURVEY_NOT_FOUND = Error("SURVEY_NOT_FOUND", "Survey not found")


class PublicSurveyUseCase:
    """
    Use case for recipients answering a survey.

    Business Rules:
    - The unique_id is the only credential
    - Completed items answer 409 and cancelled items 410
    - Answers whose key is an editable research field are applied to the
      research result, one audit entry per changed field, attributed to
      survey:<recipient_email>
    - Responses, field updates and completion commit together
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def get(self, unique_id: str) -> Result[PublicSurvey]:
        async with self.uow:
            item = await self.uow.survey_items.get_by_unique_id(unique_id)
            if item is None:
                return Return.err(SURVEY_NOT_FOUND)

            closed = closed_item_error(item)
            if closed:
                return Return.err(closed)

            questions = []
            batch = await self.uow.survey_batches.get_by_id(item.batch_id)
            if batch is not None:
                config = await self.uow.survey_configs.get_by_id(batch.survey_config_id)
                if config is not None:
                    questions = list(config.questions or [])

            name = "Unknown jurisdiction"
            state = None
            research = await self.uow.research.get_by_id(item.research_id)
            if research is not None:
                county = await self.uow.counties.get_by_id(research.county_id)
                if county is not None:
                    name = county.display_name
                    state = county.state

            return Return.ok(
                PublicSurvey(
                    unique_id=item.unique_id,
                    jurisdiction_name=name,
                    state=state,
                    questions=questions,
                    subject=item.rendered_subject,
                    body=item.rendered_body,
                    status=item.status.value,
                    created_at=item.created_at,
                )
            )

    async def submit(
        self,
        unique_id: str,
        responses: Dict[str, Any],
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Result[SubmitSurveyResponse]:
        """
        Store responses and complete the item.

        Returns:
            Result with the list of research fields changed, or Error
            (SURVEY_NOT_FOUND, ITEM_COMPLETED, ITEM_CANCELLED, INVALID_VALUE)
        """
        async with self.uow:
            item = await self.uow.survey_items.get_by_unique_id_for_update(unique_id)
            if item is None:
                return Return.err(SURVEY_NOT_FOUND)

            closed = closed_item_error(item)
            if closed:
                return Return.err(closed)

            fields_updated = []
            editable = {key: value for key, value in responses.items() if is_editable(key)}
            if editable:
                research = await self.uow.research.get_for_update(item.research_id)
                if research is None:
                    return Return.err(
                        Error("RESEARCH_NOT_FOUND", "Research result not found")
                    )

                for field, value in editable.items():
                    result = await apply_field_edit(
                        self.uow,
                        research,
                        field,
                        value,
                        user_id=None,
                        username=f"survey:{item.recipient_email}",
                        ip_address=ip_address,
                        user_agent=user_agent,
                        edit_reason=f"Survey response {unique_id}",
                        skip_unchanged=True,
                    )
                    if result.is_err():
                        # leaving the unit of work rolls back earlier fields
                        return Return.err(result.error)
                    if result.value is not None:
                        fields_updated.append(field)

            item.responses = responses
            item.status = SurveyItemStatus.completed
            item.completed_at = utcnow()
            await self.uow.survey_items.update(item)

            await self.uow.commit()

            logger.info(
                f"Survey {item.id} completed, {len(fields_updated)} research field(s) updated"
            )
            return Return.ok(SubmitSurveyResponse(fields_updated=fields_updated))
