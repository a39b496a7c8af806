"""
Admin Routes

User and invite code administration. Every endpoint requires the admin role.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from src.api.error import raise_for_error
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.admin import ManageInviteCodesUseCase, ManageUsersUseCase
from src.depends import get_unit_of_work, require_admin
from src.domain.identity import MACHINE_USER_ID
from src.libs.schema import CamelModel

router = APIRouter(prefix="/admin", tags=["Admin"])


def _activation_response(outcome: dict) -> dict:
    return {
        "success": True,
        "user": outcome["user"],
        "revokedSessions": outcome["revoked_sessions"],
    }


@router.get("/users", status_code=status.HTTP_200_OK)
async def list_users(
    admin: dict = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ManageUsersUseCase(uow).list_users()
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("/users/{user_id}/deactivate", status_code=status.HTTP_200_OK)
async def deactivate_user(
    user_id: int,
    admin: dict = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Deactivate a user and revoke all of their refresh sessions.

    Access tokens already issued stay valid until they expire.
    """
    result = await ManageUsersUseCase(uow).set_active(user_id, False)
    if result.is_err():
        raise_for_error(result.error)
    return _activation_response(result.value)


@router.post("/users/{user_id}/activate", status_code=status.HTTP_200_OK)
async def activate_user(
    user_id: int,
    admin: dict = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ManageUsersUseCase(uow).set_active(user_id, True)
    if result.is_err():
        raise_for_error(result.error)
    return _activation_response(result.value)


class CreateInviteCodeRequest(CamelModel):
    """Omitted code gets a random 8-character one; maxUses null means unlimited"""

    code: Optional[str] = Field(default=None, min_length=1, max_length=64)
    email: Optional[EmailStr] = None
    max_uses: Optional[int] = Field(default=1, ge=1)
    expires_in_days: Optional[int] = Field(default=None, ge=1)


class InviteCodeResponse(BaseModel):
    id: int
    code: str
    email: Optional[str] = None
    max_uses: Optional[int] = None
    uses_count: int
    is_active: bool
    created_by: Optional[int] = None
    used_by: Optional[int] = None
    used_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    created_at: datetime


@router.post(
    "/invite-codes",
    status_code=status.HTTP_201_CREATED,
    response_model=InviteCodeResponse,
)
async def create_invite_code(
    request: CreateInviteCodeRequest,
    admin: dict = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create an invite code.

    Raises:
        - 409 Conflict: code already exists
    """
    # the machine identity has no users row to point at
    created_by = admin["user_id"] if admin["user_id"] != MACHINE_USER_ID else None

    result = await ManageInviteCodesUseCase(uow).create(
        created_by=created_by,
        code=request.code,
        email=request.email,
        max_uses=request.max_uses,
        expires_in_days=request.expires_in_days,
    )
    if result.is_err():
        raise_for_error(result.error, {"INVITE_CODE_EXISTS": status.HTTP_409_CONFLICT})
    return result.value


@router.get(
    "/invite-codes",
    status_code=status.HTTP_200_OK,
    response_model=List[InviteCodeResponse],
)
async def list_invite_codes(
    admin: dict = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ManageInviteCodesUseCase(uow).list_all()
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/invite-codes/{invite_id}/deactivate",
    status_code=status.HTTP_200_OK,
    response_model=InviteCodeResponse,
)
async def deactivate_invite_code(
    invite_id: int,
    admin: dict = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ManageInviteCodesUseCase(uow).deactivate(invite_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
