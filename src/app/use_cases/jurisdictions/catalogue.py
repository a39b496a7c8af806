"""
Jurisdiction catalogue

Builds the dashboard rows: every county joined with its latest research
result, audit statistics, and (for county rows) the validation progress of
the municipalities inside it.
"""

from collections import defaultdict
from typing import Any, Dict, List, Optional

from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.research.serializers import research_with_county
from src.domain.entities import County, JurisdictionType, ResearchResult

PROPAGATED_METHOD = "propagated_from_county"

NAME_SEARCH_FIELDS = ("municipality_name", "county_name")
GENERAL_SEARCH_FIELDS = NAME_SEARCH_FIELDS + (
    "state",
    "primary_contact_name",
    "primary_contact_phone",
    "primary_contact_email",
    "web_address",
)


def _matches(row: Dict[str, Any], needle: str, fields) -> bool:
    for field in fields:
        value = row.get(field)
        if value and needle in str(value).lower():
            return True
    return False


async def load_jurisdiction_rows(
    uow: UnitOfWork,
    state: Optional[str] = None,
    search: Optional[str] = None,
    search_mode: str = "general",
    jurisdiction_type: str = "all",
) -> List[Dict[str, Any]]:
    """
    Load catalogue rows ordered by state, then display name.

    Must be called inside an open unit of work.

    Args:
        state: two-letter state filter
        search: case-insensitive substring; "name" mode only looks at the
            county and municipality names
        jurisdiction_type: all, county or municipality
    """
    counties = await uow.counties.list_by_state(state)
    versions = await uow.research.list_by_county_ids(c.id for c in counties)
    stats = await uow.audit_trail.edit_stats(v.id for v in versions)

    # versions arrive newest first, so the first one seen is the latest
    latest: Dict[int, ResearchResult] = {}
    edited_counties = set()
    propagated_counties = set()
    for version in versions:
        latest.setdefault(version.county_id, version)
        if version.id in stats:
            edited_counties.add(version.county_id)
        if version.method_used == PROPAGATED_METHOD:
            propagated_counties.add(version.county_id)

    municipalities_by_state: Dict[str, List[County]] = defaultdict(list)
    for county in counties:
        if county.jurisdiction_type == JurisdictionType.municipality:
            municipalities_by_state[county.state].append(county)

    rows = []
    for county in counties:
        research = latest.get(county.id)
        row = research_with_county(research, county)

        edit_count, last_edit_date = (0, None)
        if research is not None:
            edit_count, last_edit_date = stats.get(research.id, (0, None))
        row["has_audit_entries"] = edit_count > 0
        row["edit_count"] = edit_count
        row["last_edit_date"] = last_edit_date

        if county.jurisdiction_type == JurisdictionType.county:
            children = [
                m for m in municipalities_by_state[county.state] if county.is_parent_of(m)
            ]
            row["total_municipalities"] = len(children)
            row["municipalities_with_edits"] = sum(
                1 for m in children if m.id in edited_counties
            )
            row["municipalities_propagated"] = sum(
                1 for m in children if m.id in propagated_counties
            )
        else:
            row["total_municipalities"] = None
            row["municipalities_with_edits"] = None
            row["municipalities_propagated"] = None

        rows.append(row)

    if search:
        needle = search.lower()
        fields = NAME_SEARCH_FIELDS if search_mode == "name" else GENERAL_SEARCH_FIELDS
        rows = [row for row in rows if _matches(row, needle, fields)]

    if jurisdiction_type in (JurisdictionType.county.value, JurisdictionType.municipality.value):
        rows = [row for row in rows if row["jurisdiction_type"] == jurisdiction_type]

    return rows


def is_validated(row: Dict[str, Any]) -> bool:
    """
    Whether hide_validated should hide this row.

    A municipality is validated once edited or propagated from its county.
    A county needs its own edits and every child municipality validated
    (and at least one child).
    """
    if row["jurisdiction_type"] == JurisdictionType.municipality.value:
        return row["has_audit_entries"] or row.get("method_used") == PROPAGATED_METHOD

    total = row["total_municipalities"] or 0
    done = (row["municipalities_with_edits"] or 0) + (
        row["municipalities_propagated"] or 0
    )
    return row["has_audit_entries"] and total > 0 and done >= total
