import bcrypt

from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import User, UserRole
from .dtos import RegisterCommand, RegisteredUser, RegisterResponse


class RegisterUseCase:
    """
    Register Use Case

    Business Logic:
    1. Invite code (row-locked) must be active, unexpired and under its usage cap
    2. If the code is bound to an email, the emails must match (case-insensitive)
    3. Username and email must both be unused
    4. Hash password with bcrypt
    5. Create User with role=user
    6. Increment invite usage (uses_count, used_by, used_at)
    7. Commit user creation and invite usage together
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: RegisterCommand) -> Result[RegisterResponse]:
        async with self.uow:
            now = utcnow()

            invite = await self.uow.invite_codes.get_by_code_for_update(
                command.invite_code
            )
            if invite is None or not invite.is_usable(now):
                return Return.err(
                    Error("INVALID_INVITE_CODE", "Invalid or expired invite code")
                )

            if invite.email and invite.email.lower() != command.email.lower():
                return Return.err(
                    Error(
                        "INVITE_EMAIL_MISMATCH",
                        "This invite code is for a different email",
                    )
                )

            if await self.uow.users.exists_username_or_email(
                command.username, command.email
            ):
                return Return.err(
                    Error("USER_ALREADY_EXISTS", "Username or email already exists")
                )

            password_hash = bcrypt.hashpw(
                command.password.encode("utf-8"), bcrypt.gensalt(12)
            )

            user = User(
                username=command.username,
                email=command.email,
                password_hash=password_hash.decode("utf-8"),
                first_name=command.first_name,
                last_name=command.last_name,
                role=UserRole.user,
                is_active=True,
            )
            user = await self.uow.users.create(user)

            invite.uses_count += 1
            invite.used_by = user.id
            invite.used_at = now
            await self.uow.invite_codes.update(invite)

            # Commit transaction atomically
            await self.uow.commit()

            return Return.ok(
                RegisterResponse(
                    user=RegisteredUser(
                        id=user.id,
                        username=user.username,
                        email=user.email,
                        first_name=user.first_name,
                        last_name=user.last_name,
                        role=user.role.value,
                    )
                )
            )
