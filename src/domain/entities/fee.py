"""
Fee Entity

Delinquency and escrow fees charged by a jurisdiction.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import Text
from sqlmodel import Column, DateTime, Field, SQLModel

from src.domain.base import utcnow


class Fee(SQLModel, table=True):
    """Fee entity - ordered by fee_category, then fee_number"""

    __tablename__ = "fees"

    id: Optional[int] = Field(default=None, primary_key=True)
    research_result_id: int = Field(
        foreign_key="research_results.id", nullable=False, index=True
    )
    fee_category: str = Field(default="delq", max_length=50)
    fee_number: int = Field(default=1)
    fee_type: Optional[str] = Field(default=None, max_length=255)
    fee_amount: Optional[Decimal] = Field(default=None, max_digits=12, decimal_places=2)
    notes: Optional[str] = Field(default=None, sa_column=Column(Text))

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
