from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.audit_trail_repository import AuditTrailRepository
from src.adapter.repositories.contact_repository import ContactRepository
from src.adapter.repositories.county_repository import CountyRepository
from src.adapter.repositories.fee_repository import FeeRepository
from src.adapter.repositories.installment_repository import InstallmentRepository
from src.adapter.repositories.invite_code_repository import InviteCodeRepository
from src.adapter.repositories.research_repository import ResearchRepository
from src.adapter.repositories.session_repository import SessionRepository
from src.adapter.repositories.survey_repository import (
    SurveyBatchRepository,
    SurveyConfigRepository,
    SurveyQueueItemRepository,
)
from src.adapter.repositories.user_repository import UserRepository
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.sessions = SessionRepository(self.session)
        self.invite_codes = InviteCodeRepository(self.session)
        self.audit_trail = AuditTrailRepository(self.session)
        self.counties = CountyRepository(self.session)
        self.research = ResearchRepository(self.session)
        self.installments = InstallmentRepository(self.session)
        self.contacts = ContactRepository(self.session)
        self.fees = FeeRepository(self.session)
        self.survey_configs = SurveyConfigRepository(self.session)
        self.survey_batches = SurveyBatchRepository(self.session)
        self.survey_items = SurveyQueueItemRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
