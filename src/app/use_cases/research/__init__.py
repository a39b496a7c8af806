"""
Research Use Cases

Viewing, versioning and audited editing of research results.
"""

from .dtos import (
    UpdateFieldCommand,
    UpdateFieldResponse,
    EditHistoryEntry,
    EditHistoryResponse,
    VersionsResponse,
    ResearchResponse,
)
from .editable_fields import (
    EDITABLE_FIELDS,
    apply_field_edit,
    coerce_field_value,
    is_editable,
    normalize_due_date,
)
from .update_research_field_use_case import UpdateResearchFieldUseCase
from .get_edit_history_use_case import GetEditHistoryUseCase
from .get_research_versions_use_case import GetResearchVersionsUseCase
from .get_research_use_case import GetResearchUseCase

__all__ = [
    "UpdateFieldCommand",
    "UpdateFieldResponse",
    "EditHistoryEntry",
    "EditHistoryResponse",
    "VersionsResponse",
    "ResearchResponse",
    "EDITABLE_FIELDS",
    "apply_field_edit",
    "coerce_field_value",
    "is_editable",
    "normalize_due_date",
    "UpdateResearchFieldUseCase",
    "GetEditHistoryUseCase",
    "GetResearchVersionsUseCase",
    "GetResearchUseCase",
]
