from datetime import date

import pytest

from src.app.use_cases.research import EDITABLE_FIELDS, coerce_field_value, normalize_due_date
from src.app.use_cases.research.editable_fields import audit_text


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1/31/25", "2025-01-31"),
        ("12/1/49", "2049-12-01"),
        ("3/15/50", "1950-03-15"),
        (" 4/1/24 ", "2024-04-01"),
        ("2025-01-31", "2025-01-31"),
        ("Jan 31", "Jan 31"),
        ("1/31/2025", "1/31/2025"),
    ],
)
def test_normalize_due_date(raw, expected):
    assert normalize_due_date(raw) == expected


def test_allow_list():
    assert len(EDITABLE_FIELDS) == 29
    assert "due_date_10" in EDITABLE_FIELDS
    assert "notes" in EDITABLE_FIELDS
    for protected in ("id", "county_id", "research_date", "method_used", "validation_score"):
        assert protected not in EDITABLE_FIELDS


def test_due_dates_normalized_on_coerce():
    assert coerce_field_value("due_date_3", "7/4/25").value == "2025-07-04"


@pytest.mark.parametrize("value", [None, ""])
def test_date_field_cleared(value):
    result = coerce_field_value("tax_billing_date", value)

    assert result.is_ok()
    assert result.value is None


def test_date_field_parsed():
    assert coerce_field_value("tax_billing_date", "2024-11-01").value == date(2024, 11, 1)


def test_date_field_rejects_garbage():
    result = coerce_field_value("delq_search_start_date", "next tuesday")

    assert result.is_err()
    assert result.error.code == "INVALID_VALUE"


@pytest.mark.parametrize(
    "value, expected",
    [(3, 3), ("4", 4), (2.0, 2), ("", None), (None, None)],
)
def test_num_installments_accepted(value, expected):
    result = coerce_field_value("num_installments", value)

    assert result.is_ok()
    assert result.value == expected


@pytest.mark.parametrize("value", [0, 11, "two", True, 2.5])
def test_num_installments_rejected(value):
    result = coerce_field_value("num_installments", value)

    assert result.is_err()
    assert result.error.code == "INVALID_VALUE"


def test_tax_year_has_no_range():
    assert coerce_field_value("current_tax_year", "2031").value == 2031


def test_text_fields_stringify_scalars():
    assert coerce_field_value("primary_contact_phone", 5550100).value == "5550100"
    assert coerce_field_value("notes", {"a": 1}).is_err()


def test_audit_text():
    assert audit_text(None) is None
    assert audit_text(date(2024, 1, 2)) == "2024-01-02"
    assert audit_text(2024) == "2024"
