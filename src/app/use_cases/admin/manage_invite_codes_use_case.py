"""
Manage Invite Codes Use Case

Admin-side creation, listing and deactivation of registration invite codes.
"""

import secrets
import string
from datetime import timedelta
from typing import Any, Dict, List, Optional

from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import InviteCode

CODE_ALPHABET = string.ascii_uppercase + string.digits
CODE_LENGTH = 8


def generate_invite_code() -> str:
    return "".join(secrets.choice(CODE_ALPHABET) for _ in range(CODE_LENGTH))


class ManageInviteCodesUseCase:
    """
    Use case for administering invite codes.

    Business Rules:
    - Codes are unique; a random 8-character code is generated when omitted
    - max_uses=None means unlimited
    - Deactivated codes stay in the table for reference
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def create(
        self,
        created_by: Optional[int],
        code: Optional[str] = None,
        email: Optional[str] = None,
        max_uses: Optional[int] = 1,
        expires_in_days: Optional[int] = None,
    ) -> Result[Dict[str, Any]]:
        async with self.uow:
            code = code or generate_invite_code()
            if await self.uow.invite_codes.get_by_code(code):
                return Return.err(
                    Error("INVITE_CODE_EXISTS", "Invite code already exists")
                )

            expires_at = None
            if expires_in_days is not None:
                expires_at = utcnow() + timedelta(days=expires_in_days)

            invite = InviteCode(
                code=code,
                email=email,
                max_uses=max_uses,
                expires_at=expires_at,
                created_by=created_by,
            )
            invite = await self.uow.invite_codes.create(invite)
            await self.uow.commit()
            return Return.ok(invite.model_dump())

    async def list_all(self) -> Result[List[Dict[str, Any]]]:
        async with self.uow:
            invites = await self.uow.invite_codes.list_all()
            return Return.ok([invite.model_dump() for invite in invites])

    async def deactivate(self, invite_id: int) -> Result[Dict[str, Any]]:
        async with self.uow:
            invite = await self.uow.invite_codes.get_by_id(invite_id)
            if invite is None:
                return Return.err(
                    Error("INVITE_CODE_NOT_FOUND", "Invite code not found")
                )

            invite.is_active = False
            invite = await self.uow.invite_codes.update(invite)
            await self.uow.commit()
            return Return.ok(invite.model_dump())
