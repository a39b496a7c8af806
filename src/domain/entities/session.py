"""
Session Entity

Refresh-token sessions, tracked so logout can stop future renewals.
"""

import hashlib
from datetime import datetime, timedelta
from typing import Optional

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class Session(SQLModel, table=True):
    """
    Session entity - one row per login.

    Business Rules:
    - Refresh token stored as SHA-256 hash, unique (O(1) lookup)
    - Usable only while is_active and now < expires_at
    - Expires a fixed 7 days after creation
    - last_activity touched on every refresh
    - Deactivated on logout, never deleted
    - No limit on concurrent sessions per user
    """

    __tablename__ = "user_sessions"

    id: Optional[int] = Field(default=None, primary_key=True)

    user_id: int = Field(foreign_key="users.id", nullable=False, index=True)

    refresh_token_hash: str = Field(unique=True, index=True, max_length=64)
    ip_address: Optional[str] = Field(default=None, max_length=64)
    user_agent: Optional[str] = Field(default=None, max_length=512)
    is_active: bool = Field(default=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    last_activity: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_session_expires_at", "expires_at"),
        Index("idx_session_user_active", "user_id", "is_active"),
    )


SESSION_TTL = timedelta(days=7)


def hash_refresh_token(refresh_token: str) -> str:
    """SHA-256 hex digest; the raw refresh token is never stored"""
    return hashlib.sha256(refresh_token.encode()).hexdigest()
