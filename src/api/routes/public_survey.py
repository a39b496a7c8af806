"""
Public survey routes

Reached through the emailed survey link; no authentication.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, Field

from src.api.error import raise_for_error
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.surveys import PublicSurvey, PublicSurveyUseCase, SubmitSurveyResponse
from src.depends import get_client_ip, get_unit_of_work, get_user_agent

router = APIRouter(prefix="/public/survey", tags=["Public Survey"])

SURVEY_ERRORS = {
    "ITEM_COMPLETED": status.HTTP_409_CONFLICT,
    "ITEM_CANCELLED": status.HTTP_410_GONE,
    "INVALID_VALUE": status.HTTP_400_BAD_REQUEST,
}


@router.get("/{unique_id}", status_code=status.HTTP_200_OK, response_model=PublicSurvey)
async def get_public_survey(unique_id: str, uow: UnitOfWork = Depends(get_unit_of_work)):
    result = await PublicSurveyUseCase(uow).get(unique_id)
    if result.is_err():
        raise_for_error(result.error, SURVEY_ERRORS)
    return result.value


class SubmitSurveyRequest(BaseModel):
    responses: Dict[str, Any] = Field(..., description="Answers keyed by question key")


@router.post(
    "/{unique_id}", status_code=status.HTTP_200_OK, response_model=SubmitSurveyResponse
)
async def submit_public_survey(
    unique_id: str,
    request: SubmitSurveyRequest,
    http_request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Submit answers and complete the survey.

    Raises:
        - 400 Bad Request: an answer cannot be stored in its research field
        - 404 Not Found: unknown link
        - 409 Conflict: already submitted
        - 410 Gone: survey cancelled
    """
    result = await PublicSurveyUseCase(uow).submit(
        unique_id,
        request.responses,
        ip_address=get_client_ip(http_request),
        user_agent=get_user_agent(http_request),
    )
    if result.is_err():
        raise_for_error(result.error, SURVEY_ERRORS)
    return result.value
