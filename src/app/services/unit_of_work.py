from abc import ABC, abstractmethod

from src.app.repositories.audit_trail_repository import IAuditTrailRepository
from src.app.repositories.contact_repository import IContactRepository
from src.app.repositories.county_repository import ICountyRepository
from src.app.repositories.fee_repository import IFeeRepository
from src.app.repositories.installment_repository import IInstallmentRepository
from src.app.repositories.invite_code_repository import IInviteCodeRepository
from src.app.repositories.research_repository import IResearchRepository
from src.app.repositories.session_repository import ISessionRepository
from src.app.repositories.survey_repository import (
    ISurveyBatchRepository,
    ISurveyConfigRepository,
    ISurveyQueueItemRepository,
)
from src.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    sessions: ISessionRepository
    invite_codes: IInviteCodeRepository
    audit_trail: IAuditTrailRepository
    counties: ICountyRepository
    research: IResearchRepository
    installments: IInstallmentRepository
    contacts: IContactRepository
    fees: IFeeRepository
    survey_configs: ISurveyConfigRepository
    survey_batches: ISurveyBatchRepository
    survey_items: ISurveyQueueItemRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
