from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple

from src.domain.entities import FieldEditAudit


class IAuditTrailRepository(ABC):
    """
    Field edit audit trail interface - application layer.

    Append-only: there is deliberately no update or delete.
    """

    @abstractmethod
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
        """Append one immutable audit row"""
        pass

    @abstractmethod
    async def history(self, research_id: int) -> List[FieldEditAudit]:
        """All entries for a research result, newest first"""
        pass

    @abstractmethod
    async def edit_stats(
        self, research_ids: Iterable[int]
    ) -> Dict[int, Tuple[int, datetime]]:
        """Map research_id -> (edit_count, last_edit_date) for ids with edits"""
        pass
