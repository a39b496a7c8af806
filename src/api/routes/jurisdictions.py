"""
Jurisdiction and research routes

Catalogue listing, audited research edits, versions, evidence and CSV export.
All endpoints require authentication.
"""

from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import Response
from pydantic import Field

from src.api.error import raise_for_error
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.jurisdictions import (
    CSV_FILENAME,
    ExportCsvUseCase,
    ListCountiesQuery,
    ListCountiesUseCase,
    ListStatesUseCase,
)
from src.app.use_cases.research import (
    EditHistoryResponse,
    GetEditHistoryUseCase,
    GetResearchUseCase,
    GetResearchVersionsUseCase,
    ResearchResponse,
    UpdateFieldCommand,
    UpdateFieldResponse,
    UpdateResearchFieldUseCase,
    VersionsResponse,
)
from src.depends import get_client_ip, get_current_user, get_unit_of_work, get_user_agent
from src.libs.schema import CamelModel

router = APIRouter(tags=["Jurisdictions"])


@router.get("/states", status_code=status.HTTP_200_OK)
async def list_states(
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ListStatesUseCase(uow).execute()
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/counties", status_code=status.HTTP_200_OK)
async def list_counties(
    state: Optional[str] = None,
    search: Optional[str] = None,
    search_mode: str = Query("general", alias="searchMode", pattern="^(general|name)$"),
    jurisdiction_type: str = Query(
        "all", alias="jurisdictionType", pattern="^(all|county|municipality)$"
    ),
    county_name: Optional[str] = Query(None, alias="countyName"),
    hide_validated: bool = Query(False, alias="hideValidated"),
    paginate: bool = False,
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=500),
    sort_by: str = Query("display_name", alias="sortBy"),
    sort_order: str = Query("asc", alias="sortOrder", pattern="^(asc|desc)$"),
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Jurisdictions joined with their latest research.

    Returns a plain list, or {data, total, page, limit, totalPages,
    sortBy, sortOrder} when paginate=true.
    """
    query = ListCountiesQuery(
        state=state,
        search=search,
        search_mode=search_mode,
        jurisdiction_type=jurisdiction_type,
        county_name=county_name,
        hide_validated=hide_validated,
        paginate=paginate,
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    result = await ListCountiesUseCase(uow).execute(query)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


class UpdateFieldRequest(CamelModel):
    field: str = Field(..., min_length=1, description="Research field to change")
    value: Any = Field(..., description="New value; null clears the field")
    edit_reason: Optional[str] = Field(default=None, description="Why the edit was made")


@router.patch(
    "/counties/{research_id}",
    status_code=status.HTTP_200_OK,
    response_model=UpdateFieldResponse,
)
async def update_research_field(
    research_id: int,
    request: UpdateFieldRequest,
    http_request: Request,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Edit one field of a research result and record it in the audit trail.

    Raises:
        - 400 Bad Request: field not editable, value cannot be coerced
        - 404 Not Found: research result does not exist
    """
    command = UpdateFieldCommand(
        research_id=research_id,
        field=request.field,
        value=request.value,
        edit_reason=request.edit_reason,
        user_id=current_user["user_id"],
        username=current_user["username"],
        ip_address=get_client_ip(http_request),
        user_agent=get_user_agent(http_request),
    )
    result = await UpdateResearchFieldUseCase(uow).execute(command)
    if result.is_err():
        raise_for_error(
            result.error,
            {
                "INVALID_FIELD": status.HTTP_400_BAD_REQUEST,
                "INVALID_VALUE": status.HTTP_400_BAD_REQUEST,
            },
        )
    return result.value


@router.get(
    "/counties/{research_id}/edit-history",
    status_code=status.HTTP_200_OK,
    response_model=EditHistoryResponse,
)
async def edit_history(
    research_id: int,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetEditHistoryUseCase(uow).execute(research_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get(
    "/counties/{research_id}/versions",
    status_code=status.HTTP_200_OK,
    response_model=VersionsResponse,
)
async def research_versions(
    research_id: int,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetResearchVersionsUseCase(uow).execute(research_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get(
    "/research/{research_id}",
    status_code=status.HTTP_200_OK,
    response_model=ResearchResponse,
)
async def get_research(
    research_id: int,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetResearchUseCase(uow).execute(research_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/screenshots/{research_id}", status_code=status.HTTP_200_OK)
async def list_screenshots(
    research_id: int,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetResearchUseCase(uow).screenshots(research_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/source-data/{research_id}", status_code=status.HTTP_200_OK)
async def list_source_data(
    research_id: int,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetResearchUseCase(uow).source_data(research_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/export/csv", status_code=status.HTTP_200_OK)
async def export_csv(
    state: Optional[str] = None,
    search: Optional[str] = None,
    jurisdiction_type: str = Query(
        "all", alias="jurisdictionType", pattern="^(all|county|municipality)$"
    ),
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ExportCsvUseCase(uow).execute(
        state=state, search=search, jurisdiction_type=jurisdiction_type
    )
    if result.is_err():
        raise_for_error(result.error)
    return Response(
        content=result.value,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{CSV_FILENAME}"'},
    )
