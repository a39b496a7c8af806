import hmac
from typing import Optional

from fastapi import Depends, Header, Request, status
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.libs.result import Error
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.app.services.token_service import REFRESH_TOKEN_TYPE, TokenService, get_token_service
from src.domain.entities import UserRole
from src.domain.identity import machine_identity

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

BEARER_PREFIX = "Bearer "


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_ready_token_service() -> TokenService:
    """Token service for routes that mint tokens; 503 until it is initialised"""
    token_service = get_token_service()
    if token_service is None:
        raise ClientError(
            Error("AUTH_NOT_READY", "Authentication service not ready"),
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )
    return token_service


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    if authorization.startswith(BEARER_PREFIX):
        authorization = authorization[len(BEARER_PREFIX):]
    return authorization.strip() or None


def _is_machine_token(token: Optional[str]) -> bool:
    machine_token = ApplicationConfig.MACHINE_TOKEN
    if not machine_token or not token:
        return False
    return hmac.compare_digest(token.encode(), machine_token.encode())


async def get_current_user(authorization: Optional[str] = Header(None)) -> dict:
    """
    Resolve the caller from the Authorization header.

    Checks run in a fixed order, first match wins:
    machine token, service readiness (503), missing token (401),
    invalid or refresh token (401).

    Returns:
        {user_id, username, role}

    Raises:
        ClientError: 401 AUTHENTICATION_REQUIRED / INVALID_TOKEN,
            503 AUTH_NOT_READY
    """
    token = _bearer_token(authorization)

    if _is_machine_token(token):
        return machine_identity()

    token_service = get_ready_token_service()

    if token is None:
        raise ClientError(
            Error("AUTHENTICATION_REQUIRED", "Authentication required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    payload = token_service.verify(token)
    if payload is None or payload.get("type") == REFRESH_TOKEN_TYPE:
        raise ClientError(
            Error("INVALID_TOKEN", "Invalid or expired token"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return {
        "user_id": payload["user_id"],
        "username": payload["username"],
        "role": payload["role"],
    }


async def require_admin(current_user: dict = Depends(get_current_user)) -> dict:
    if current_user["role"] != UserRole.admin.value:
        raise ClientError(
            Error("FORBIDDEN", "Admin access required"),
            status_code=status.HTTP_403_FORBIDDEN,
        )
    return current_user


def get_client_ip(request: Request) -> Optional[str]:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else None


def get_user_agent(request: Request) -> Optional[str]:
    return request.headers.get("user-agent")
