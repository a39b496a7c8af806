from datetime import datetime, timedelta

import bcrypt
import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from src.depends import get_unit_of_work
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.token_service import get_token_service
from src.domain.base import utcnow
from src.domain.entities import (
    County,
    FieldEditAudit,
    InviteCode,
    ResearchResult,
    SurveyConfig,
    User,
    UserRole,
)


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_session):
    from httpx import ASGITransport
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test/api") as ac:
        yield ac


class Seeder:
    """
    Inserts rows straight through the test session.

    Every helper returns plain values (ids, dicts) rather than entities:
    requests roll back the shared session, which expires loaded objects.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _add(self, obj):
        self.session.add(obj)
        await self.session.commit()
        return obj.id

    async def user(
        self,
        username: str = "alice",
        password: str = "Secret123!",
        role: UserRole = UserRole.user,
        is_active: bool = True,
        email: str = None,
    ) -> dict:
        password_hash = bcrypt.hashpw(password.encode(), bcrypt.gensalt(4)).decode()
        user_id = await self._add(
            User(
                username=username,
                email=email or f"{username}@example.com",
                password_hash=password_hash,
                role=role,
                is_active=is_active,
            )
        )
        return {
            "id": user_id,
            "username": username,
            "password": password,
            "role": role.value,
        }

    async def invite_code(
        self,
        code: str = "WELCOME1",
        email: str = None,
        max_uses: int = 1,
        uses_count: int = 0,
        is_active: bool = True,
        expires_at: datetime = None,
    ) -> int:
        return await self._add(
            InviteCode(
                code=code,
                email=email,
                max_uses=max_uses,
                uses_count=uses_count,
                is_active=is_active,
                expires_at=expires_at,
            )
        )

    async def county(
        self,
        state: str = "WI",
        county_name: str = "Dane County",
        municipality_name: str = None,
        fips_code: str = None,
    ) -> int:
        return await self._add(
            County(
                state=state,
                county_name=county_name,
                municipality_name=municipality_name,
                fips_code=fips_code,
            )
        )

    async def research(
        self, county_id: int, days_ago: int = 0, **fields
    ) -> int:
        return await self._add(
            ResearchResult(
                county_id=county_id,
                research_date=utcnow() - timedelta(days=days_ago),
                **fields,
            )
        )

    async def audit(self, research_id: int, field_name: str = "notes") -> int:
        return await self._add(
            FieldEditAudit(
                research_id=research_id,
                field_name=field_name,
                old_value=None,
                new_value="seeded",
                username="seeder",
            )
        )

    async def survey_config(self, **fields) -> int:
        values = {
            "name": "Annual check",
            "subject_template": "Tax info for {{ jurisdiction_name }}",
            "body_template": "Hi {{ contact_name }}, please visit {{ survey_link }}",
            "questions": [
                {"key": "current_tax_year", "label": "Tax year", "type": "number"},
                {"key": "comments", "label": "Comments", "type": "text"},
            ],
        }
        values.update(fields)
        return await self._add(SurveyConfig(**values))


@pytest_asyncio.fixture
async def seed(db_session):
    return Seeder(db_session)


def bearer(user: dict) -> dict:
    token = get_token_service().create_access_token(
        user["id"], user["username"], user["role"]
    )
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def user_headers(client, seed):
    user = await seed.user(username="researcher")
    return bearer(user)


@pytest_asyncio.fixture
async def admin_user(client, seed):
    return await seed.user(username="admin", role=UserRole.admin)


@pytest_asyncio.fixture
async def admin_headers(admin_user):
    return bearer(admin_user)
