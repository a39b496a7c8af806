"""
Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    UserRole,
    JurisdictionType,
    SurveyItemStatus,
    SurveyScopeType,
)

# Export all entities
from .user import User
from .session import Session
from .invite_code import InviteCode
from .county import County
from .research_result import ResearchResult
from .field_edit_audit import FieldEditAudit
from .installment import Installment
from .contact import Contact
from .fee import Fee
from .evidence import Screenshot, SourceData
from .survey import SurveyConfig, SurveyBatch, SurveyQueueItem

__all__ = [
    # Enums
    "UserRole",
    "JurisdictionType",
    "SurveyItemStatus",
    "SurveyScopeType",
    # Entities
    "User",
    "Session",
    "InviteCode",
    "County",
    "ResearchResult",
    "FieldEditAudit",
    "Installment",
    "Contact",
    "Fee",
    "Screenshot",
    "SourceData",
    "SurveyConfig",
    "SurveyBatch",
    "SurveyQueueItem",
]
