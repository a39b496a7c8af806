"""
Jurisdiction Use Case DTOs
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from src.libs.schema import CamelModel


class ListCountiesQuery(BaseModel):
    """Filters, sorting and pagination for the jurisdiction list"""

    state: Optional[str] = None
    search: Optional[str] = None
    search_mode: str = "general"
    jurisdiction_type: str = "all"
    county_name: Optional[str] = None
    hide_validated: bool = False
    paginate: bool = False
    page: int = 1
    limit: int = 50
    sort_by: str = "display_name"
    sort_order: str = "asc"


class CountyPage(CamelModel):
    """Paginated jurisdiction list"""

    data: List[Dict[str, Any]]
    total: int
    page: int
    limit: int
    total_pages: int
    sort_by: str
    sort_order: str


class StateSummary(BaseModel):
    code: str
    name: str
    jurisdiction_count: int
