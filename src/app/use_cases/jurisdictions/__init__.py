"""
Jurisdiction Use Cases

Listing, state summaries and CSV export of the jurisdiction catalogue.
"""

from .dtos import ListCountiesQuery, CountyPage, StateSummary
from .catalogue import load_jurisdiction_rows, is_validated
from .list_counties_use_case import ListCountiesUseCase
from .list_states_use_case import ListStatesUseCase, STATE_NAMES
from .export_csv_use_case import ExportCsvUseCase, CSV_COLUMNS, CSV_FILENAME

__all__ = [
    "ListCountiesQuery",
    "CountyPage",
    "StateSummary",
    "load_jurisdiction_rows",
    "is_validated",
    "ListCountiesUseCase",
    "ListStatesUseCase",
    "STATE_NAMES",
    "ExportCsvUseCase",
    "CSV_COLUMNS",
    "CSV_FILENAME",
]
