"""
Login Use Case

Handles user authentication and returns an access/refresh token pair.
"""

import logging

import bcrypt

from src.libs.result import Error, Result, Return
from src.app.services.token_service import TokenService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from .dtos import LoginCommand, LoginResponse, UserSummary

logger = logging.getLogger(__name__)

# Hash of a throwaway password, checked when the user does not exist
_DUMMY_HASH = bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(12))


class LoginUseCase:
    """
    Use case for user login and token issuance.

    Business Rules:
    - Username field accepts username or email
    - Unknown user and wrong password give the same error
    - A bcrypt check runs even for unknown users (uniform timing)
    - Disabled accounts are reported only after the password verifies
    - Creates a refresh session recording IP and user agent
    - Updates user.last_login
    """

    def __init__(self, uow: UnitOfWork, token_service: TokenService):
        self.uow = uow
        self.token_service = token_service

    async def execute(self, command: LoginCommand) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            command: LoginCommand with credentials and client metadata

        Returns:
            Result with LoginResponse containing tokens and user info, or Error
        """
        async with self.uow:
            user = await self.uow.users.get_by_username_or_email(command.username)

            if user is None:
                bcrypt.checkpw(command.password.encode(), _DUMMY_HASH)
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid username or password")
                )

            password_valid = bcrypt.checkpw(
                command.password.encode(), user.password_hash.encode()
            )
            if not password_valid:
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid username or password")
                )

            if not user.is_active:
                return Return.err(Error("USER_DISABLED", "Account is disabled"))

            tokens = self.token_service.issue_token_pair(
                user.id, user.username, user.role.value
            )

            user.last_login = utcnow()
            await self.uow.users.update(user)

            await self.uow.sessions.create_session(
                user.id, tokens.refresh_token, command.ip_address, command.user_agent
            )

            # Commit transaction
            await self.uow.commit()

            logger.info(f"User {user.id} logged in")

            return Return.ok(
                LoginResponse(
                    user=UserSummary(
                        id=user.id,
                        username=user.username,
                        email=user.email,
                        role=user.role.value,
                    ),
                    access_token=tokens.access_token,
                    refresh_token=tokens.refresh_token,
                )
            )
