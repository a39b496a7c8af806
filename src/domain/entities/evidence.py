"""
Evidence Entities

Screenshots and raw source data captured while researching a jurisdiction.
Read-only from the API's point of view.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Text
from sqlmodel import Column, DateTime, Field, SQLModel

from src.domain.base import utcnow


class Screenshot(SQLModel, table=True):
    __tablename__ = "screenshots"

    id: Optional[int] = Field(default=None, primary_key=True)
    research_result_id: int = Field(
        foreign_key="research_results.id", nullable=False, index=True
    )
    file_path: str = Field(max_length=500)
    url: Optional[str] = Field(default=None, max_length=1000)
    description: Optional[str] = Field(default=None, sa_column=Column(Text))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))


class SourceData(SQLModel, table=True):
    __tablename__ = "source_data"

    id: Optional[int] = Field(default=None, primary_key=True)
    research_result_id: int = Field(
        foreign_key="research_results.id", nullable=False, index=True
    )
    source_url: Optional[str] = Field(default=None, max_length=1000)
    source_type: Optional[str] = Field(default=None, max_length=50)
    content: Optional[str] = Field(default=None, sa_column=Column(Text))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
