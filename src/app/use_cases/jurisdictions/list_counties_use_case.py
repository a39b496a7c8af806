"""
List Counties Use Case

The filtered, sorted and optionally paginated jurisdiction list shown on
the dashboard.
"""

import math
from typing import Any, Dict, List, Union

from src.libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from .catalogue import is_validated, load_jurisdiction_rows
from .dtos import CountyPage, ListCountiesQuery

DEFAULT_SORT = "display_name"

SORTABLE_FIELDS = frozenset(
    {
        "display_name",
        "municipality_name",
        "county_name",
        "state",
        "fips_code",
        "jurisdiction_type",
        "current_tax_year",
        "num_installments",
        "research_date",
        "edit_count",
        "last_edit_date",
        "validation_score",
    }
)


def _sort_rows(rows: List[Dict[str, Any]], sort_by: str, descending: bool):
    def key(row):
        value = row[sort_by]
        return value.lower() if isinstance(value, str) else value

    # nulls sort last in either direction
    present = [r for r in rows if r.get(sort_by) is not None]
    missing = [r for r in rows if r.get(sort_by) is None]
    present.sort(key=key, reverse=descending)
    return present + missing


class ListCountiesUseCase:
    """
    Use case for the jurisdiction list.

    Business Rules:
    - Rows are counties joined with their latest research version
    - county_name narrows to one county and the municipalities inside it
    - hide_validated drops rows that no longer need attention
    - Default sort is display_name ascending, case-insensitive
    - Without paginate the full list is returned
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, query: ListCountiesQuery
    ) -> Result[Union[CountyPage, List[Dict[str, Any]]]]:
        async with self.uow:
            rows = await load_jurisdiction_rows(
                self.uow,
                state=query.state,
                search=query.search,
                search_mode=query.search_mode,
                jurisdiction_type=query.jurisdiction_type,
            )

        if query.county_name:
            wanted = {query.county_name, f"{query.county_name} County"}
            if query.county_name.endswith(" County"):
                wanted.add(query.county_name[: -len(" County")])
            rows = [row for row in rows if row["county_name"] in wanted]

        if query.hide_validated:
            rows = [row for row in rows if not is_validated(row)]

        sort_by = query.sort_by if query.sort_by in SORTABLE_FIELDS else DEFAULT_SORT
        sort_order = "desc" if query.sort_order.lower() == "desc" else "asc"
        rows = _sort_rows(rows, sort_by, descending=sort_order == "desc")

        if not query.paginate:
            return Return.ok(rows)

        total = len(rows)
        offset = (query.page - 1) * query.limit
        return Return.ok(
            CountyPage(
                data=rows[offset : offset + query.limit],
                total=total,
                page=query.page,
                limit=query.limit,
                total_pages=math.ceil(total / query.limit) if query.limit else 0,
                sort_by=sort_by,
                sort_order=sort_order,
            )
        )
