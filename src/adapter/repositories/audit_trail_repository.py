from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.audit_trail_repository import IAuditTrailRepository
from src.domain.entities import FieldEditAudit


class AuditTrailRepository(IAuditTrailRepository):
    """Field edit audit trail implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def record_edit(
        self,
        research_id: int,
        user_id: Optional[int],
        username: str,
        field_name: str,
        old_value: Optional[str],
        new_value: Optional[str],
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
        edit_reason: Optional[str] = None,
    ) -> FieldEditAudit:
        """Append one audit row (immutable)"""
        entry = FieldEditAudit(
            research_id=research_id,
            user_id=user_id,
            username=username,
            field_name=field_name,
            old_value=old_value,
            new_value=new_value,
            ip_address=ip_address,
            user_agent=user_agent,
            edit_reason=edit_reason,
        )
        self.session.add(entry)
        await self.session.flush()
        await self.session.refresh(entry)
        return entry

    async def history(self, research_id: int) -> List[FieldEditAudit]:
        # id breaks ties between edits stamped in the same instant
        stmt = (
            select(FieldEditAudit)
            .where(FieldEditAudit.research_id == research_id)
            .order_by(FieldEditAudit.created_at.desc(), FieldEditAudit.id.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def edit_stats(
        self, research_ids: Iterable[int]
    ) -> Dict[int, Tuple[int, datetime]]:
        ids = list(research_ids)
        if not ids:
            return {}
        stmt = (
            select(
                FieldEditAudit.research_id,
                func.count(FieldEditAudit.id),
                func.max(FieldEditAudit.created_at),
            )
            .where(FieldEditAudit.research_id.in_(ids))
            .group_by(FieldEditAudit.research_id)
        )
        result = await self.session.exec(stmt)
        return {
            research_id: (count, last_edit)
            for research_id, count, last_edit in result.all()
        }
