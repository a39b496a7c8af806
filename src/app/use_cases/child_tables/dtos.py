"""
Child Table DTOs

Payloads for the installment, contact and fee rows hanging off a
research result. Updates only touch the fields present in the payload.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from src.libs.schema import CamelModel


def _blank_to_none(value):
    if isinstance(value, str) and value.strip() == "":
        return None
    return value


class InstallmentData(BaseModel):
    due_date: Optional[date] = None
    delq_collector: Optional[str] = None
    escrow_collector: Optional[str] = None
    escrow_search_start_date: Optional[date] = None
    tax_billing_date: Optional[date] = None
    precommitment_date: Optional[date] = None
    finalize_balance_date: Optional[date] = None
    make_payment_due_date: Optional[date] = None
    notes: Optional[str] = None

    @field_validator(
        "due_date",
        "escrow_search_start_date",
        "tax_billing_date",
        "precommitment_date",
        "finalize_balance_date",
        "make_payment_due_date",
        mode="before",
    )
    @classmethod
    def empty_date_is_null(cls, value):
        return _blank_to_none(value)


class NewInstallmentData(InstallmentData):
    installment_number: int


class ContactData(BaseModel):
    contact_type: Optional[str] = None
    sort_order: Optional[int] = None
    name: Optional[str] = None
    title: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    physical_address: Optional[str] = None
    mailing_address: Optional[str] = None
    general_phone: Optional[str] = None
    fax: Optional[str] = None
    website: Optional[str] = None
    tax_search_website: Optional[str] = None
    notes: Optional[str] = None


class ReorderContactsData(CamelModel):
    ordered_ids: List[int] = Field(default_factory=list)


class FeeData(BaseModel):
    fee_category: Optional[str] = None
    fee_number: Optional[int] = None
    fee_type: Optional[str] = None
    fee_amount: Optional[Decimal] = None
    notes: Optional[str] = None

    @field_validator("fee_amount", mode="before")
    @classmethod
    def empty_amount_is_null(cls, value):
        return _blank_to_none(value)
