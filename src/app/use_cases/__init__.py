"""
Use Cases

Organized by area:
- auth/: registration, login, token refresh, logout, profile
- admin/: user and invite code administration
- research/: audited research edits, history, versions
- jurisdictions/: catalogue listing, states, CSV export
- child_tables/: installments, contacts, fees
- surveys/: survey templates, queue, public responses

Import from subdirectories for better organization.
"""

from .auth import (
    RegisterUseCase,
    LoginUseCase,
    RefreshTokenUseCase,
    LogoutUseCase,
    GetProfileUseCase,
)
from .admin import (
    ManageUsersUseCase,
    ManageInviteCodesUseCase,
)
from .research import (
    UpdateResearchFieldUseCase,
    GetEditHistoryUseCase,
    GetResearchVersionsUseCase,
    GetResearchUseCase,
)
from .jurisdictions import (
    ListCountiesUseCase,
    ListStatesUseCase,
    ExportCsvUseCase,
)
from .child_tables import (
    InstallmentsUseCase,
    ContactsUseCase,
    FeesUseCase,
)
from .surveys import (
    SurveyConfigsUseCase,
    GenerateSurveyBatchUseCase,
    SurveyQueueUseCase,
    PublicSurveyUseCase,
)

__all__ = [
    # Auth
    "RegisterUseCase",
    "LoginUseCase",
    "RefreshTokenUseCase",
    "LogoutUseCase",
    "GetProfileUseCase",
    # Admin
    "ManageUsersUseCase",
    "ManageInviteCodesUseCase",
    # Research
    "UpdateResearchFieldUseCase",
    "GetEditHistoryUseCase",
    "GetResearchVersionsUseCase",
    "GetResearchUseCase",
    # Jurisdictions
    "ListCountiesUseCase",
    "ListStatesUseCase",
    "ExportCsvUseCase",
    # Child tables
    "InstallmentsUseCase",
    "ContactsUseCase",
    "FeesUseCase",
    # Surveys
    "SurveyConfigsUseCase",
    "GenerateSurveyBatchUseCase",
    "SurveyQueueUseCase",
    "PublicSurveyUseCase",
]
