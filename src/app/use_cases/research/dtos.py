"""
Research Use Case DTOs

Commands and responses for viewing and editing research results.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from src.libs.schema import CamelModel


class UpdateFieldCommand(BaseModel):
    """One field edit on a research result, with who made it and from where"""

    research_id: int
    field: str
    value: Any = None
    edit_reason: Optional[str] = None
    user_id: Optional[int] = None
    username: str
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


class UpdateFieldResponse(CamelModel):
    success: bool = True
    message: str = "Field updated successfully"
    audit_logged: bool = True


class EditHistoryEntry(BaseModel):
    id: int
    research_id: int
    field_name: str
    old_value: Optional[str] = None
    new_value: Optional[str] = None
    user_id: Optional[int] = None
    username: str
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    edit_reason: Optional[str] = None
    created_at: datetime


class EditHistoryResponse(CamelModel):
    success: bool = True
    research_id: int
    edit_history: List[EditHistoryEntry]
    total_edits: int


class VersionsResponse(CamelModel):
    success: bool = True
    current_research_id: int
    county_id: int
    versions: List[Dict[str, Any]]
    total_versions: int


class ResearchResponse(CamelModel):
    success: bool = True
    research: Dict[str, Any]
