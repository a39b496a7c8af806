"""
Editable research fields

The allow-list of research_results columns that users (and survey
responses) may change, the value coercion applied before writing, and the
audited write itself.
"""

import re
from datetime import date
from typing import Any, Optional

from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import FieldEditAudit, ResearchResult
from src.domain.entities.installment import MAX_INSTALLMENT_NUMBER, MIN_INSTALLMENT_NUMBER

DUE_DATE_FIELDS = tuple(f"due_date_{n}" for n in range(1, 11))

DATE_FIELDS = (
    "delq_search_start_date",
    "default_escrow_search_start_date",
    "tax_billing_date",
)

INTEGER_FIELDS = ("current_tax_year", "num_installments")

EDITABLE_FIELDS = frozenset(
    INTEGER_FIELDS
    + DUE_DATE_FIELDS
    + (
        "primary_contact_name",
        "primary_contact_title",
        "primary_contact_phone",
        "primary_contact_email",
        "tax_authority_physical_address",
        "tax_authority_mailing_address",
        "general_phone_number",
        "fax_number",
        "web_address",
        "county_website",
        "pay_taxes_url",
        "notes",
        "default_delq_collector",
        "default_escrow_collector",
    )
    + DATE_FIELDS
)

_SHORT_DATE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{2})$")


def is_editable(field: str) -> bool:
    return field in EDITABLE_FIELDS


def normalize_due_date(value: str) -> str:
    """M/D/YY -> YYYY-MM-DD (YY < 50 is 20YY); anything else is kept as typed"""
    match = _SHORT_DATE.match(value.strip())
    if not match:
        return value
    month, day, year = (int(part) for part in match.groups())
    full_year = year + (2000 if year < 50 else 1900)
    return f"{full_year:04d}-{month:02d}-{day:02d}"


def _parse_int(field: str, value: Any) -> Optional[int]:
    if isinstance(value, bool):
        raise ValueError(f"{field} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and re.fullmatch(r"\s*-?\d+\s*", value):
        return int(value)
    raise ValueError(f"{field} must be an integer")


def coerce_field_value(field: str, value: Any) -> Result[Any]:
    """
    Convert an incoming JSON value to what the column stores.

    Args:
        field: an editable research field
        value: raw value from the request (null clears the field)

    Returns:
        Result with the coerced value, or INVALID_VALUE
    """
    if value is None:
        return Return.ok(None)

    try:
        if field in DATE_FIELDS:
            if value == "":
                return Return.ok(None)
            if isinstance(value, date):
                return Return.ok(value)
            try:
                return Return.ok(date.fromisoformat(str(value).strip()))
            except ValueError:
                raise ValueError(f"{field} must be a date in YYYY-MM-DD format")

        if field in INTEGER_FIELDS:
            if value == "":
                return Return.ok(None)
            number = _parse_int(field, value)
            if field == "num_installments" and not (
                MIN_INSTALLMENT_NUMBER <= number <= MAX_INSTALLMENT_NUMBER
            ):
                raise ValueError(
                    f"num_installments must be between {MIN_INSTALLMENT_NUMBER} "
                    f"and {MAX_INSTALLMENT_NUMBER}"
                )
            return Return.ok(number)

        if isinstance(value, (dict, list)):
            raise ValueError(f"{field} must be a scalar value")

        text = value if isinstance(value, str) else str(value)
        if field in DUE_DATE_FIELDS:
            text = normalize_due_date(text)
        return Return.ok(text)
    except ValueError as e:
        return Return.err(Error("INVALID_VALUE", str(e)))


def audit_text(value: Any) -> Optional[str]:
    """Render a column value the way the audit trail stores it"""
    if value is None:
        return None
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


async def apply_field_edit(
    uow: UnitOfWork,
    research: ResearchResult,
    field: str,
    value: Any,
    user_id: Optional[int],
    username: str,
    ip_address: Optional[str] = None,
    user_agent: Optional[str] = None,
    edit_reason: Optional[str] = None,
    skip_unchanged: bool = False,
) -> Result[Optional[FieldEditAudit]]:
    """
    Write one field and append its audit row inside the caller's unit of work.

    The caller loads research with get_for_update and commits. Returns the
    audit entry, or None when skip_unchanged is set and nothing changed.
    """
    if not is_editable(field):
        return Return.err(Error("INVALID_FIELD", "Invalid field name"))

    coerced = coerce_field_value(field, value)
    if coerced.is_err():
        return coerced

    old_value = getattr(research, field)
    new_value = coerced.value
    if skip_unchanged and audit_text(old_value) == audit_text(new_value):
        return Return.ok(None)

    setattr(research, field, new_value)
    await uow.research.update(research)

    entry = await uow.audit_trail.record_edit(
        research_id=research.id,
        user_id=user_id,
        username=username,
        field_name=field,
        old_value=audit_text(old_value),
        new_value=audit_text(new_value),
        ip_address=ip_address,
        user_agent=user_agent,
        edit_reason=edit_reason,
    )
    return Return.ok(entry)
