from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.identity import MACHINE_USER_ID
from .dtos import ProfileResponse


class GetProfileUseCase:
    """
    Use case for loading the caller's profile.

    The machine identity has no users row, so it gets a synthetic profile.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, current_user: dict) -> Result[ProfileResponse]:
        if current_user["user_id"] == MACHINE_USER_ID:
            return Return.ok(
                ProfileResponse(
                    id=MACHINE_USER_ID,
                    username=current_user["username"],
                    role=current_user["role"],
                )
            )

        async with self.uow:
            user = await self.uow.users.get_by_id(current_user["user_id"])
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            return Return.ok(
                ProfileResponse(
                    id=user.id,
                    username=user.username,
                    email=user.email,
                    first_name=user.first_name,
                    last_name=user.last_name,
                    role=user.role.value,
                    created_at=user.created_at,
                    last_login=user.last_login,
                )
            )
