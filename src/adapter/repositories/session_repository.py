from typing import Optional

from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.session_repository import ISessionRepository
from src.domain.base import utcnow
from src.domain.entities import Session
from src.domain.entities.session import SESSION_TTL, hash_refresh_token


class SessionRepository(ISessionRepository):
    """Session registry implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_session(
        self,
        user_id: int,
        refresh_token: str,
        ip_address: Optional[str],
        user_agent: Optional[str],
    ) -> Session:
        """Create a new session expiring SESSION_TTL from now"""
        now = utcnow()
        session_obj = Session(
            user_id=user_id,
            refresh_token_hash=hash_refresh_token(refresh_token),
            ip_address=ip_address,
            user_agent=user_agent,
            created_at=now,
            last_activity=now,
            expires_at=now + SESSION_TTL,
        )
        self.session.add(session_obj)
        await self.session.flush()
        await self.session.refresh(session_obj)
        return session_obj

    async def find_active_session(self, refresh_token: str) -> Optional[Session]:
        """Unique lookup on the token hash, filtered to usable sessions"""
        stmt = select(Session).where(
            Session.refresh_token_hash == hash_refresh_token(refresh_token),
            Session.is_active == True,
            Session.expires_at > utcnow(),
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def touch(self, session_id: int) -> None:
        stmt = (
            update(Session)
            .where(Session.id == session_id)
            .values(last_activity=utcnow())
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def revoke(self, refresh_token: str) -> None:
        stmt = (
            update(Session)
            .where(Session.refresh_token_hash == hash_refresh_token(refresh_token))
            .values(is_active=False)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def revoke_all_by_user_id(self, user_id: int) -> int:
        """Revoke all active sessions for a user"""
        stmt = (
            update(Session)
            .where(Session.user_id == user_id, Session.is_active == True)
            .values(is_active=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
