from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, EmailStr, Field

from src.api.error import raise_for_error
from src.app.services.token_service import TokenService
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    RegisterCommand,
    RegisterResponse,
    RegisterUseCase,
    LoginCommand,
    LoginResponse,
    LoginUseCase,
    RefreshTokenResponse,
    RefreshTokenUseCase,
    LogoutResponse,
    LogoutUseCase,
    ProfileResponse,
    GetProfileUseCase,
)
from src.depends import (
    get_client_ip,
    get_current_user,
    get_ready_token_service,
    get_unit_of_work,
    get_user_agent,
)
from src.libs.schema import CamelModel

router = APIRouter(prefix="/auth", tags=["Authentication"])


class RegisterRequest(CamelModel):
    """
    Register HTTP request payload

    Registration is invite-only; the invite code is checked by the use case.
    """

    username: str = Field(..., min_length=1, max_length=100, description="Login name")
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)
    invite_code: str = Field(..., min_length=1, description="Invite code")


@router.post(
    "/register", status_code=status.HTTP_201_CREATED, response_model=RegisterResponse
)
async def register(
    request: RegisterRequest, uow: UnitOfWork = Depends(get_unit_of_work)
):
    """
    Register with an invite code.

    Raises:
        - 400 Bad Request: invalid/expired invite, invite bound to another
          email, username or email taken, malformed body
    """
    command = RegisterCommand(
        username=request.username,
        email=request.email,
        password=request.password,
        first_name=request.first_name,
        last_name=request.last_name,
        invite_code=request.invite_code,
    )

    result = await RegisterUseCase(uow).execute(command)

    if result.is_err():
        raise_for_error(
            result.error,
            {
                "INVALID_INVITE_CODE": status.HTTP_400_BAD_REQUEST,
                "INVITE_EMAIL_MISMATCH": status.HTTP_400_BAD_REQUEST,
                "USER_ALREADY_EXISTS": status.HTTP_400_BAD_REQUEST,
            },
        )

    return result.value


class LoginRequest(BaseModel):
    """Login HTTP request payload; username may also be an email"""

    username: str = Field(..., min_length=1, description="Username or email")
    password: str = Field(..., min_length=1, description="User password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    request: LoginRequest,
    http_request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_service: TokenService = Depends(get_ready_token_service),
):
    """
    Authenticate and receive an access/refresh token pair.

    Raises:
        - 401 Unauthorized: unknown user, wrong password, or account
          disabled (reported only once the password checks out)
    """
    command = LoginCommand(
        username=request.username,
        password=request.password,
        ip_address=get_client_ip(http_request),
        user_agent=get_user_agent(http_request),
    )

    result = await LoginUseCase(uow, token_service).execute(command)

    if result.is_err():
        raise_for_error(
            result.error,
            {
                "INVALID_CREDENTIALS": status.HTTP_401_UNAUTHORIZED,
                "USER_DISABLED": status.HTTP_401_UNAUTHORIZED,
            },
        )

    return result.value


class RefreshRequest(CamelModel):
    refresh_token: str = Field(..., min_length=1, description="Refresh token")


@router.post("/refresh", status_code=status.HTTP_200_OK, response_model=RefreshTokenResponse)
async def refresh(
    request: RefreshRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_service: TokenService = Depends(get_ready_token_service),
):
    """
    Exchange a refresh token for a new access token.

    The refresh token itself is not rotated.

    Raises:
        - 401 Unauthorized: invalid token, revoked or expired session,
          disabled user
    """
    result = await RefreshTokenUseCase(uow, token_service).execute(request.refresh_token)

    if result.is_err():
        raise_for_error(
            result.error,
            {
                "INVALID_TOKEN": status.HTTP_401_UNAUTHORIZED,
                "SESSION_NOT_FOUND": status.HTTP_401_UNAUTHORIZED,
                "USER_DISABLED": status.HTTP_401_UNAUTHORIZED,
                "USER_NOT_FOUND": status.HTTP_401_UNAUTHORIZED,
            },
        )

    return result.value


class LogoutRequest(CamelModel):
    refresh_token: str = Field(..., description="Refresh token to revoke")


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=LogoutResponse)
async def logout(request: LogoutRequest, uow: UnitOfWork = Depends(get_unit_of_work)):
    """Revoke the session of a refresh token; unknown tokens are ignored"""
    result = await LogoutUseCase(uow).execute(request.refresh_token)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/me", status_code=status.HTTP_200_OK, response_model=ProfileResponse)
async def me(
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Profile of the authenticated caller.

    Raises:
        - 401 Unauthorized: missing or invalid token
        - 404 Not Found: user no longer exists
    """
    result = await GetProfileUseCase(uow).execute(current_user)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
