from typing import Any, Dict, Optional

from src.domain.entities import County, ResearchResult


def county_fields(county: County) -> Dict[str, Any]:
    """County columns plus the derived jurisdiction_type and display_name"""
    row = county.model_dump()
    row["jurisdiction_type"] = county.jurisdiction_type.value
    row["display_name"] = county.display_name
    return row


def research_with_county(
    research: Optional[ResearchResult], county: County
) -> Dict[str, Any]:
    """
    Flatten a county and its research result into one row.

    The county keeps its own id; the research id is exposed as research_id.
    """
    row: Dict[str, Any] = {}
    if research is not None:
        row.update(research.model_dump(exclude={"id", "county_id"}))
    row.update(county_fields(county))
    row["county_id"] = county.id
    row["research_id"] = research.id if research is not None else None
    return row
