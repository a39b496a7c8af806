"""
Export CSV Use Case

Flat CSV download of the jurisdiction catalogue.
"""

import csv
import io
import logging
from typing import Optional

from src.libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from .catalogue import load_jurisdiction_rows

logger = logging.getLogger(__name__)

CSV_FILENAME = "tax_jurisdictions.csv"

# (header, row key) in column order
CSV_COLUMNS = (
    ("State", "state"),
    ("Municipality Name", "display_name"),
    ("FIPS Code", "fips_code"),
    ("Parent County", "county_name"),
    ("Current Tax Year", "current_tax_year"),
    ("# Installments", "num_installments"),
    ("Due Date 1", "due_date_1"),
    ("Due Date 2", "due_date_2"),
    ("Due Date 3", "due_date_3"),
    ("Due Date 4", "due_date_4"),
    ("Due Date 5", "due_date_5"),
    ("Due Date 6", "due_date_6"),
    ("Primary Contact Name", "primary_contact_name"),
    ("Primary Contact Title", "primary_contact_title"),
    ("Primary Contact Phone", "primary_contact_phone"),
    ("Primary Contact Email", "primary_contact_email"),
    ("Tax Authority Physical Address", "tax_authority_physical_address"),
    ("Tax Authority Mailing Address", "tax_authority_mailing_address"),
    ("General Phone Number", "general_phone_number"),
    ("Fax Number", "fax_number"),
    ("Web Address", "web_address"),
    ("Notes", "notes"),
)


def _cell(value) -> str:
    return "" if value is None else str(value)


class ExportCsvUseCase:
    """
    Use case for the CSV export.

    Business Rules:
    - Same filtering as the list (state, general search, jurisdiction_type)
    - 22 fixed columns; missing values are empty strings
    - Every cell is quoted, embedded quotes doubled
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        state: Optional[str] = None,
        search: Optional[str] = None,
        jurisdiction_type: str = "all",
    ) -> Result[str]:
        async with self.uow:
            rows = await load_jurisdiction_rows(
                self.uow,
                state=state,
                search=search,
                jurisdiction_type=jurisdiction_type,
            )

        buffer = io.StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerow([header for header, _ in CSV_COLUMNS])
        for row in rows:
            writer.writerow([_cell(row.get(key)) for _, key in CSV_COLUMNS])

        logger.info(f"Exported {len(rows)} jurisdictions to CSV")
        return Return.ok(buffer.getvalue())
