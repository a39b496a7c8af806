"""
Child Table Use Cases

Installments, contacts and fees attached to a research result.
"""

from .dtos import (
    InstallmentData,
    NewInstallmentData,
    ContactData,
    ReorderContactsData,
    FeeData,
)
from .installments_use_case import InstallmentsUseCase
from .contacts_use_case import ContactsUseCase, order_contact_types
from .fees_use_case import FeesUseCase

__all__ = [
    "InstallmentData",
    "NewInstallmentData",
    "ContactData",
    "ReorderContactsData",
    "FeeData",
    "InstallmentsUseCase",
    "ContactsUseCase",
    "order_contact_types",
    "FeesUseCase",
]
