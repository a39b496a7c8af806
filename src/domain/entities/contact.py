"""
Contact Entity

Ordered contacts attached to a research result.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Text
from sqlmodel import Column, DateTime, Field, SQLModel

from src.domain.base import utcnow

# Display order for known contact types; anything else sorts after these
CONTACT_TYPE_ORDER = ("primary", "secondary", "billing", "technical", "emergency")


class Contact(SQLModel, table=True):
    """Contact entity - ordered by sort_order, then contact_type"""

    __tablename__ = "contacts"

    id: Optional[int] = Field(default=None, primary_key=True)
    research_result_id: int = Field(
        foreign_key="research_results.id", nullable=False, index=True
    )
    contact_type: str = Field(default="primary", max_length=50)
    sort_order: int = Field(default=0)

    name: Optional[str] = Field(default=None, max_length=255)
    title: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=50)
    email: Optional[str] = Field(default=None, max_length=255)
    physical_address: Optional[str] = Field(default=None, sa_column=Column(Text))
    mailing_address: Optional[str] = Field(default=None, sa_column=Column(Text))
    general_phone: Optional[str] = Field(default=None, max_length=50)
    fax: Optional[str] = Field(default=None, max_length=50)
    website: Optional[str] = Field(default=None, max_length=500)
    tax_search_website: Optional[str] = Field(default=None, max_length=500)
    notes: Optional[str] = Field(default=None, sa_column=Column(Text))

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
