"""
ResearchResult Entity

One research pass over a jurisdiction. The newest by research_date is the
version shown and edited in the dashboard.
"""

from datetime import date, datetime
from typing import Optional

from sqlalchemy import Text
from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class ResearchResult(SQLModel, table=True):
    """
    ResearchResult entity - tax schedule, collection settings and contact
    details gathered for a county.

    Business Rules:
    - Many versions per county; latest = max(research_date)
    - Every user edit goes through the audit trail
    - Due dates are free text, normalised to YYYY-MM-DD when entered as M/D/YY
    """

    __tablename__ = "research_results"

    id: Optional[int] = Field(default=None, primary_key=True)
    county_id: int = Field(foreign_key="counties.id", nullable=False, index=True)

    research_date: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    method_used: Optional[str] = Field(default=None, max_length=100)
    success: Optional[bool] = Field(default=None)
    validation_score: Optional[float] = Field(default=None)

    # Tax schedule
    current_tax_year: Optional[int] = Field(default=None)
    num_installments: Optional[int] = Field(default=None)
    due_date_1: Optional[str] = Field(default=None, max_length=50)
    due_date_2: Optional[str] = Field(default=None, max_length=50)
    due_date_3: Optional[str] = Field(default=None, max_length=50)
    due_date_4: Optional[str] = Field(default=None, max_length=50)
    due_date_5: Optional[str] = Field(default=None, max_length=50)
    due_date_6: Optional[str] = Field(default=None, max_length=50)
    due_date_7: Optional[str] = Field(default=None, max_length=50)
    due_date_8: Optional[str] = Field(default=None, max_length=50)
    due_date_9: Optional[str] = Field(default=None, max_length=50)
    due_date_10: Optional[str] = Field(default=None, max_length=50)

    # General collection settings
    default_delq_collector: Optional[str] = Field(default=None, max_length=255)
    default_escrow_collector: Optional[str] = Field(default=None, max_length=255)
    delq_search_start_date: Optional[date] = Field(default=None)
    default_escrow_search_start_date: Optional[date] = Field(default=None)
    tax_billing_date: Optional[date] = Field(default=None)

    # Primary contact
    primary_contact_name: Optional[str] = Field(default=None, max_length=255)
    primary_contact_title: Optional[str] = Field(default=None, max_length=255)
    primary_contact_phone: Optional[str] = Field(default=None, max_length=50)
    primary_contact_email: Optional[str] = Field(default=None, max_length=255)

    # Tax authority
    tax_authority_physical_address: Optional[str] = Field(
        default=None, sa_column=Column(Text)
    )
    tax_authority_mailing_address: Optional[str] = Field(
        default=None, sa_column=Column(Text)
    )
    general_phone_number: Optional[str] = Field(default=None, max_length=50)
    fax_number: Optional[str] = Field(default=None, max_length=50)
    web_address: Optional[str] = Field(default=None, max_length=500)
    county_website: Optional[str] = Field(default=None, max_length=500)
    pay_taxes_url: Optional[str] = Field(default=None, max_length=500)

    notes: Optional[str] = Field(default=None, sa_column=Column(Text))

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_research_county_date", "county_id", "research_date"),
    )
