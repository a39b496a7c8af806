"""
InviteCode Entity

Registration gate codes.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, SQLModel

from src.domain.base import utcnow


class InviteCode(SQLModel, table=True):
    """
    InviteCode entity - single- or limited-use registration gate.

    Business Rules:
    - Usable while is_active, not expired and uses_count < max_uses
    - max_uses=None means unlimited
    - When email is set, only that email (case-insensitive) may register
    - uses_count incremented in the same transaction as user creation
    """

    __tablename__ = "invite_codes"

    id: Optional[int] = Field(default=None, primary_key=True)
    code: str = Field(unique=True, index=True, max_length=64)
    email: Optional[str] = Field(default=None, max_length=255)

    max_uses: Optional[int] = Field(default=1)
    uses_count: int = Field(default=0)
    is_active: bool = Field(default=True)

    created_by: Optional[int] = Field(default=None)
    used_by: Optional[int] = Field(default=None)
    used_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Timestamps
    expires_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    def is_usable(self, now: datetime) -> bool:
        if not self.is_active:
            return False
        if self.expires_at is not None and self.expires_at <= now:
            return False
        if self.max_uses is not None and self.uses_count >= self.max_uses:
            return False
        return True
