"""
Manage Users Use Case

Admin-side listing and soft (de)activation of user accounts.
"""

import logging
from typing import Any, Dict, List

from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import User

logger = logging.getLogger(__name__)


def _public_user(user: User) -> Dict[str, Any]:
    return {
        "id": user.id,
        "username": user.username,
        "email": user.email,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "role": user.role.value,
        "is_active": user.is_active,
        "created_at": user.created_at,
        "last_login": user.last_login,
    }


class ManageUsersUseCase:
    """
    Use case for administering users.

    Business Rules:
    - Users are never hard-deleted, only deactivated
    - Deactivation revokes every active refresh session of the user
    - Access tokens already issued stay valid until they expire
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def list_users(self) -> Result[List[Dict[str, Any]]]:
        async with self.uow:
            users = await self.uow.users.list_all()
            return Return.ok([_public_user(user) for user in users])

    async def set_active(self, user_id: int, is_active: bool) -> Result[Dict[str, Any]]:
        """
        Activate or deactivate a user.

        Returns:
            Result with the updated user and the number of sessions revoked
        """
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            user.is_active = is_active
            await self.uow.users.update(user)

            revoked = 0
            if not is_active:
                revoked = await self.uow.sessions.revoke_all_by_user_id(user.id)

            await self.uow.commit()

            logger.info(
                f"User {user.id} {'activated' if is_active else 'deactivated'}, "
                f"{revoked} session(s) revoked"
            )
            return Return.ok({"user": _public_user(user), "revoked_sessions": revoked})
