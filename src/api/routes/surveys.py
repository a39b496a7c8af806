"""
Survey routes

Survey templates, queue generation and queue management. All endpoints
require authentication.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import Field

from config import ApplicationConfig
from src.api.error import raise_for_error
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.surveys import (
    GenerateCommand,
    GenerateResponse,
    GenerateSurveyBatchUseCase,
    ItemPage,
    PreviewResponse,
    ScopeCommand,
    SurveyConfigData,
    SurveyConfigsUseCase,
    SurveyConfigUpdate,
    SurveyQueueUseCase,
    UpdateItemCommand,
)
from src.depends import get_current_user, get_unit_of_work
from src.domain.identity import MACHINE_USER_ID
from src.libs.schema import CamelModel

router = APIRouter(tags=["Surveys"])

ITEM_ERRORS = {
    "ITEM_COMPLETED": status.HTTP_409_CONFLICT,
    "ITEM_CANCELLED": status.HTTP_410_GONE,
    "INVALID_STATUS": status.HTTP_400_BAD_REQUEST,
}


def _actor_id(current_user: dict) -> Optional[int]:
    return None if current_user["user_id"] == MACHINE_USER_ID else current_user["user_id"]


# ============================================================================
# Survey configs
# ============================================================================


@router.get("/survey-configs", status_code=status.HTTP_200_OK)
async def list_survey_configs(
    include_inactive: bool = Query(False, alias="includeInactive"),
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await SurveyConfigsUseCase(uow).list(include_inactive)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("/survey-configs", status_code=status.HTTP_201_CREATED)
async def create_survey_config(
    request: SurveyConfigData,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await SurveyConfigsUseCase(uow).create(request, _actor_id(current_user))
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/survey-configs/{config_id}", status_code=status.HTTP_200_OK)
async def get_survey_config(
    config_id: int,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await SurveyConfigsUseCase(uow).get(config_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.put("/survey-configs/{config_id}", status_code=status.HTTP_200_OK)
async def update_survey_config(
    config_id: int,
    request: SurveyConfigUpdate,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await SurveyConfigsUseCase(uow).update(config_id, request)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete("/survey-configs/{config_id}", status_code=status.HTTP_200_OK)
async def delete_survey_config(
    config_id: int,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Soft delete: the config is deactivated, existing batches keep it"""
    result = await SurveyConfigsUseCase(uow).deactivate(config_id)
    if result.is_err():
        raise_for_error(result.error)
    return {"success": True, "message": "Survey config deactivated"}


# ============================================================================
# Queue generation
# ============================================================================


class ScopeFilter(CamelModel):
    state: Optional[str] = None
    county_name: Optional[str] = None
    research_ids: Optional[List[int]] = None


class ScopeRequest(CamelModel):
    scope_type: str = Field("all", pattern="^(all|state|county|jurisdictions)$")
    scope_filter: ScopeFilter = Field(default_factory=ScopeFilter)

    def filter_values(self) -> Dict[str, Any]:
        return self.scope_filter.model_dump(exclude_none=True)


class GenerateRequest(ScopeRequest):
    survey_config_id: int


@router.post(
    "/survey-queue/preview",
    status_code=status.HTTP_200_OK,
    response_model=PreviewResponse,
)
async def preview_survey_queue(
    request: ScopeRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """How many jurisdictions a scope reaches, and how many can be emailed"""
    use_case = GenerateSurveyBatchUseCase(uow, ApplicationConfig.SURVEY_BASE_URL)
    result = await use_case.preview(
        ScopeCommand(
            scope_type=request.scope_type, scope_filter=request.filter_values()
        )
    )
    if result.is_err():
        raise_for_error(result.error, {"INVALID_SCOPE": status.HTTP_400_BAD_REQUEST})
    return result.value


@router.post(
    "/survey-queue/generate",
    status_code=status.HTTP_201_CREATED,
    response_model=GenerateResponse,
)
async def generate_survey_queue(
    request: GenerateRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create a batch with one pending survey per in-scope jurisdiction.

    Raises:
        - 400 Bad Request: malformed scope
        - 404 Not Found: survey config missing or inactive
    """
    use_case = GenerateSurveyBatchUseCase(uow, ApplicationConfig.SURVEY_BASE_URL)
    result = await use_case.generate(
        GenerateCommand(
            survey_config_id=request.survey_config_id,
            scope_type=request.scope_type,
            scope_filter=request.filter_values(),
            created_by=_actor_id(current_user),
        )
    )
    if result.is_err():
        raise_for_error(result.error, {"INVALID_SCOPE": status.HTTP_400_BAD_REQUEST})
    return result.value


# ============================================================================
# Batches and items
# ============================================================================


@router.get("/survey-queue/batches", status_code=status.HTTP_200_OK)
async def list_survey_batches(
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await SurveyQueueUseCase(uow).list_batches()
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/survey-queue/batches/{batch_id}", status_code=status.HTTP_200_OK)
async def get_survey_batch(
    batch_id: int,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await SurveyQueueUseCase(uow).get_batch(batch_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete("/survey-queue/batches/{batch_id}", status_code=status.HTTP_200_OK)
async def delete_survey_batch(
    batch_id: int,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await SurveyQueueUseCase(uow).delete_batch(batch_id)
    if result.is_err():
        raise_for_error(result.error)
    return {"success": True}


class BulkActionRequest(CamelModel):
    action: str = Field(..., description="mark_sent or cancel")


@router.post(
    "/survey-queue/batches/{batch_id}/bulk-action", status_code=status.HTTP_200_OK
)
async def bulk_survey_action(
    batch_id: int,
    request: BulkActionRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Apply mark_sent or cancel to every non-terminal item of a batch"""
    result = await SurveyQueueUseCase(uow).bulk_action(batch_id, request.action)
    if result.is_err():
        raise_for_error(result.error, {"INVALID_ACTION": status.HTTP_400_BAD_REQUEST})
    return result.value


@router.get(
    "/survey-queue/items", status_code=status.HTTP_200_OK, response_model=ItemPage
)
async def list_survey_items(
    batch_id: Optional[int] = Query(None, alias="batchId"),
    status_filter: Optional[str] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=500),
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await SurveyQueueUseCase(uow).list_items(
        batch_id=batch_id, status=status_filter, page=page, limit=limit
    )
    if result.is_err():
        raise_for_error(result.error, ITEM_ERRORS)
    return result.value


@router.get("/survey-queue/stats", status_code=status.HTTP_200_OK)
async def survey_stats(
    batch_id: Optional[int] = Query(None, alias="batchId"),
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await SurveyQueueUseCase(uow).stats(batch_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.patch("/survey-queue/items/{item_id}", status_code=status.HTTP_200_OK)
async def update_survey_item(
    item_id: int,
    request: UpdateItemCommand,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Change an item's status or notes.

    Raises:
        - 400 Bad Request: status not one of pending, sent, cancelled
        - 404 Not Found: unknown item
        - 409 Conflict: item already completed
        - 410 Gone: item cancelled
    """
    result = await SurveyQueueUseCase(uow).update_item(item_id, request)
    if result.is_err():
        raise_for_error(result.error, ITEM_ERRORS)
    return result.value
