"""
Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class UserRole(str, Enum):
    """Application-wide user role"""

    user = "user"
    admin = "admin"


class JurisdictionType(str, Enum):
    """Derived kind of a counties row"""

    county = "county"
    municipality = "municipality"


class SurveyItemStatus(str, Enum):
    """Survey queue item lifecycle"""

    pending = "pending"
    sent = "sent"
    completed = "completed"
    cancelled = "cancelled"


class SurveyScopeType(str, Enum):
    """How a survey batch selects its jurisdictions"""

    all = "all"
    state = "state"
    county = "county"
    jurisdictions = "jurisdictions"
