"""
Installment Entity

Per-installment collection details for a research result.
"""

from datetime import date, datetime
from typing import Optional

from sqlalchemy import Text, UniqueConstraint
from sqlmodel import Column, DateTime, Field, SQLModel

from src.domain.base import utcnow

MIN_INSTALLMENT_NUMBER = 1
MAX_INSTALLMENT_NUMBER = 10


class Installment(SQLModel, table=True):
    """
    Installment entity.

    Business Rules:
    - installment_number in 1..10
    - At most one row per (research_result_id, installment_number)
    """

    __tablename__ = "installments"

    id: Optional[int] = Field(default=None, primary_key=True)
    research_result_id: int = Field(
        foreign_key="research_results.id", nullable=False, index=True
    )
    installment_number: int

    due_date: Optional[date] = Field(default=None)
    delq_collector: Optional[str] = Field(default=None, max_length=255)
    escrow_collector: Optional[str] = Field(default=None, max_length=255)
    escrow_search_start_date: Optional[date] = Field(default=None)
    tax_billing_date: Optional[date] = Field(default=None)
    precommitment_date: Optional[date] = Field(default=None)
    finalize_balance_date: Optional[date] = Field(default=None)
    make_payment_due_date: Optional[date] = Field(default=None)
    notes: Optional[str] = Field(default=None, sa_column=Column(Text))

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        UniqueConstraint(
            "research_result_id", "installment_number", name="uq_installment_number"
        ),
    )
