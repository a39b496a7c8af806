"""
Authentication Use Cases

All authentication-related business logic.
"""

from .register_use_case import RegisterUseCase
from .login_use_case import LoginUseCase
from .refresh_token_use_case import RefreshTokenUseCase
from .logout_use_case import LogoutUseCase
from .get_profile_use_case import GetProfileUseCase
from .dtos import (
    RegisterCommand,
    LoginCommand,
    RegisteredUser,
    RegisterResponse,
    UserSummary,
    LoginResponse,
    RefreshTokenResponse,
    LogoutResponse,
    ProfileResponse,
)

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "LoginUseCase",
    "RefreshTokenUseCase",
    "LogoutUseCase",
    "GetProfileUseCase",
    # DTOs - Commands
    "RegisterCommand",
    "LoginCommand",
    # DTOs - Responses
    "RegisterResponse",
    "LoginResponse",
    "RefreshTokenResponse",
    "LogoutResponse",
    "ProfileResponse",
    # DTOs - Nested Models
    "RegisteredUser",
    "UserSummary",
]
