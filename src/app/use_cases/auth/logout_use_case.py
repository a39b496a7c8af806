from src.libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from .dtos import LogoutResponse


class LogoutUseCase:
    """
    Use case for logout.

    Revokes the refresh session. Always succeeds: unknown or already
    revoked tokens are a silent no-op.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, refresh_token: str) -> Result[LogoutResponse]:
        async with self.uow:
            await self.uow.sessions.revoke(refresh_token)
            await self.uow.commit()
        return Return.ok(LogoutResponse())
