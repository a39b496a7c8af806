"""
FieldEditAudit Entity

Immutable record of one field-level change to a research result.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Text
from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class FieldEditAudit(SQLModel, table=True):
    """
    FieldEditAudit entity - the audit trail.

    Business Rules:
    - Append-only: never updated or deleted
    - One row per accepted field mutation
    - old_value is read in the same transaction that applies the update
    - user_id is NULL for survey-sourced edits (username says who)
    """

    __tablename__ = "field_edit_audit"

    id: Optional[int] = Field(default=None, primary_key=True)

    research_id: int = Field(foreign_key="research_results.id", nullable=False)
    field_name: str = Field(max_length=100)
    old_value: Optional[str] = Field(default=None, sa_column=Column(Text))
    new_value: Optional[str] = Field(default=None, sa_column=Column(Text))

    user_id: Optional[int] = Field(default=None)
    username: str = Field(max_length=255)
    ip_address: Optional[str] = Field(default=None, max_length=64)
    user_agent: Optional[str] = Field(default=None, max_length=512)
    edit_reason: Optional[str] = Field(default=None, sa_column=Column(Text))

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_field_edit_research_id", "research_id"),
        Index("idx_field_edit_created_at", "created_at"),
    )
