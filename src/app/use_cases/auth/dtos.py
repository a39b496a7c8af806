"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.libs.schema import CamelModel


# ============================================================================
# Commands
# ============================================================================


class RegisterCommand(BaseModel):
    """Register command - validated registration intent"""

    username: str
    email: str
    password: str
    invite_code: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class LoginCommand(BaseModel):
    """Login command - username may also be an email address"""

    username: str
    password: str
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class RegisteredUser(BaseModel):
    """Public fields of a newly registered user"""

    id: int
    username: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: str


class RegisterResponse(CamelModel):
    """Response for register use case"""

    success: bool = True
    message: str = "Registration successful"
    user: RegisteredUser


class UserSummary(BaseModel):
    """User identity in authentication responses"""

    id: int
    username: str
    email: Optional[str] = None
    role: str


class LoginResponse(CamelModel):
    """Response for login use case"""

    success: bool = True
    user: UserSummary
    access_token: str
    refresh_token: str


class RefreshTokenResponse(CamelModel):
    """Response for refresh use case - a fresh access token only"""

    success: bool = True
    access_token: str
    user: UserSummary


class LogoutResponse(CamelModel):
    """Response for logout use case"""

    success: bool = True


class ProfileResponse(BaseModel):
    """Response for GET /auth/me"""

    id: int
    username: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: str
    created_at: Optional[datetime] = None
    last_login: Optional[datetime] = None
