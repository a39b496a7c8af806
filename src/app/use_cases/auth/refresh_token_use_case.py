"""
Refresh Token Use Case

Mints a fresh access token from a refresh token whose session is still live.
"""

from src.libs.result import Error, Result, Return
from src.app.services.token_service import REFRESH_TOKEN_TYPE, TokenService
from src.app.services.unit_of_work import UnitOfWork
from .dtos import RefreshTokenResponse, UserSummary


class RefreshTokenUseCase:
    """
    Use case for refreshing JWT access tokens.

    Business Rules:
    - Token must verify and carry type=refresh
    - Session must be active and unexpired (logout stops renewal)
    - User must still exist and be active
    - Session last_activity touched on success
    - The refresh token itself is not rotated
    """

    def __init__(self, uow: UnitOfWork, token_service: TokenService):
        self.uow = uow
        self.token_service = token_service

    async def execute(self, refresh_token: str) -> Result[RefreshTokenResponse]:
        claims = self.token_service.verify(refresh_token)
        if claims is None or claims.get("type") != REFRESH_TOKEN_TYPE:
            return Return.err(Error("INVALID_TOKEN", "Invalid refresh token"))

        async with self.uow:
            session = await self.uow.sessions.find_active_session(refresh_token)
            if session is None:
                return Return.err(
                    Error("SESSION_NOT_FOUND", "Session not found or expired")
                )

            user = await self.uow.users.get_by_id(session.user_id)
            if user is None or not user.is_active:
                return Return.err(Error("USER_DISABLED", "Account is disabled"))

            await self.uow.sessions.touch(session.id)
            await self.uow.commit()

            access_token = self.token_service.create_access_token(
                user.id, user.username, user.role.value
            )

            return Return.ok(
                RefreshTokenResponse(
                    access_token=access_token,
                    user=UserSummary(
                        id=user.id, username=user.username, role=user.role.value
                    ),
                )
            )
