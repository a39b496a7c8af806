"""
Survey Entities

Survey templates, generated batches, and the per-jurisdiction queue items
that recipients answer through a public link.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Text
from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow
from .enums import SurveyItemStatus, SurveyScopeType


class SurveyConfig(SQLModel, table=True):
    """
    SurveyConfig entity - a reusable survey template.

    Business Rules:
    - subject/body templates use {{ variable }} placeholders
    - questions is a list of {key, label, type}; a key that names an
      editable research field is written back on submission
    - Deleting only deactivates (batches keep referencing it)
    """

    __tablename__ = "survey_configs"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=255)
    description: Optional[str] = Field(default=None, sa_column=Column(Text))
    subject_template: str = Field(default="", sa_column=Column(Text))
    body_template: str = Field(default="", sa_column=Column(Text))
    questions: list = Field(default_factory=list, sa_column=Column(JSON))
    is_active: bool = Field(default=True)
    created_by: Optional[int] = Field(default=None)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))


class SurveyBatch(SQLModel, table=True):
    """SurveyBatch entity - one generate call over a scope"""

    __tablename__ = "survey_batches"

    id: Optional[int] = Field(default=None, primary_key=True)
    survey_config_id: int = Field(foreign_key="survey_configs.id", nullable=False)
    scope_type: SurveyScopeType = Field(default=SurveyScopeType.all)
    scope_filter: dict = Field(default_factory=dict, sa_column=Column(JSON))
    created_by: Optional[int] = Field(default=None)
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))


class SurveyQueueItem(SQLModel, table=True):
    """
    SurveyQueueItem entity - one survey addressed to one jurisdiction.

    Business Rules:
    - unique_id is the public link secret
    - completed and cancelled are terminal: further writes are rejected
    """

    __tablename__ = "survey_queue_items"

    id: Optional[int] = Field(default=None, primary_key=True)
    batch_id: int = Field(foreign_key="survey_batches.id", nullable=False)
    research_id: int = Field(foreign_key="research_results.id", nullable=False)
    unique_id: str = Field(unique=True, index=True, max_length=64)

    recipient_name: Optional[str] = Field(default=None, max_length=255)
    recipient_email: Optional[str] = Field(default=None, max_length=255)
    rendered_subject: Optional[str] = Field(default=None, sa_column=Column(Text))
    rendered_body: Optional[str] = Field(default=None, sa_column=Column(Text))

    status: SurveyItemStatus = Field(default=SurveyItemStatus.pending)
    responses: Optional[dict] = Field(default=None, sa_column=Column(JSON))
    notes: Optional[str] = Field(default=None, sa_column=Column(Text))

    # Timestamps
    sent_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    completed_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_survey_item_batch_status", "batch_id", "status"),
    )

    @property
    def is_closed(self) -> bool:
        return self.status in (SurveyItemStatus.completed, SurveyItemStatus.cancelled)
