"""
Survey Queue Use Case

Batches, queue items and their status transitions.
"""

import logging
import math
from typing import Any, Dict, List, Optional

from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import SurveyBatch, SurveyItemStatus, SurveyQueueItem
from .dtos import ItemPage, UpdateItemCommand

logger = logging.getLogger(__name__)

BATCH_NOT_FOUND = Error("BATCH_NOT_FOUND", "Survey batch not found")
ITEM_NOT_FOUND = Error("ITEM_NOT_FOUND", "Survey item not found")

# Statuses a user may set directly; completed only comes from a response
SETTABLE_STATUSES = (
    SurveyItemStatus.pending,
    SurveyItemStatus.sent,
    SurveyItemStatus.cancelled,
)

BULK_ACTIONS = {
    "mark_sent": ((SurveyItemStatus.pending,), SurveyItemStatus.sent),
    "cancel": (
        (SurveyItemStatus.pending, SurveyItemStatus.sent),
        SurveyItemStatus.cancelled,
    ),
}


def closed_item_error(item: SurveyQueueItem) -> Optional[Error]:
    """ITEM_COMPLETED / ITEM_CANCELLED for terminal items, else None"""
    if item.status == SurveyItemStatus.completed:
        return Error("ITEM_COMPLETED", "Survey has already been completed")
    if item.status == SurveyItemStatus.cancelled:
        return Error("ITEM_CANCELLED", "Survey has been cancelled")
    return None


def _set_status(item: SurveyQueueItem, status: SurveyItemStatus) -> None:
    item.status = status
    if status == SurveyItemStatus.sent:
        item.sent_at = utcnow()


def _item_row(item: SurveyQueueItem) -> Dict[str, Any]:
    row = item.model_dump()
    row["status"] = item.status.value
    return row


class SurveyQueueUseCase:
    """
    Use case for managing generated survey batches.

    Business Rules:
    - completed and cancelled items reject further writes
    - Users may set pending, sent or cancelled; sent stamps sent_at
    - Bulk actions only touch non-terminal items
    - Deleting a batch removes its items
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def _batch_row(self, batch: SurveyBatch) -> Dict[str, Any]:
        counts = await self.uow.survey_items.count_by_status(batch.id)
        row = batch.model_dump()
        row["scope_type"] = batch.scope_type.value
        row["counts"] = counts
        row["total_items"] = sum(counts.values())
        return row

    async def list_batches(self) -> Result[List[Dict[str, Any]]]:
        async with self.uow:
            batches = await self.uow.survey_batches.list_all()
            return Return.ok([await self._batch_row(batch) for batch in batches])

    async def get_batch(self, batch_id: int) -> Result[Dict[str, Any]]:
        async with self.uow:
            batch = await self.uow.survey_batches.get_by_id(batch_id)
            if batch is None:
                return Return.err(BATCH_NOT_FOUND)
            return Return.ok(await self._batch_row(batch))

    async def delete_batch(self, batch_id: int) -> Result[None]:
        async with self.uow:
            batch = await self.uow.survey_batches.get_by_id(batch_id)
            if batch is None:
                return Return.err(BATCH_NOT_FOUND)

            await self.uow.survey_batches.delete(batch)
            await self.uow.commit()
            logger.info(f"Survey batch {batch_id} deleted")
            return Return.ok()

    async def list_items(
        self,
        batch_id: Optional[int] = None,
        status: Optional[str] = None,
        page: int = 1,
        limit: int = 50,
    ) -> Result[ItemPage]:
        item_status = None
        if status:
            try:
                item_status = SurveyItemStatus(status)
            except ValueError:
                return Return.err(Error("INVALID_STATUS", f"Invalid status: {status}"))

        async with self.uow:
            items, total = await self.uow.survey_items.list_filtered(
                batch_id=batch_id,
                status=item_status,
                limit=limit,
                offset=(page - 1) * limit,
            )
            return Return.ok(
                ItemPage(
                    data=[_item_row(item) for item in items],
                    total=total,
                    page=page,
                    limit=limit,
                    total_pages=math.ceil(total / limit) if limit else 0,
                )
            )

    async def stats(self, batch_id: Optional[int] = None) -> Result[Dict[str, Any]]:
        async with self.uow:
            counts = await self.uow.survey_items.count_by_status(batch_id)
            return Return.ok({"batchId": batch_id, "total": sum(counts.values()), **counts})

    async def update_item(
        self, item_id: int, command: UpdateItemCommand
    ) -> Result[Dict[str, Any]]:
        """
        Change an item's status and/or notes.

        Returns:
            Result with the updated item, or Error
            (ITEM_NOT_FOUND, ITEM_COMPLETED, ITEM_CANCELLED, INVALID_STATUS)
        """
        async with self.uow:
            item = await self.uow.survey_items.get_for_update(item_id)
            if item is None:
                return Return.err(ITEM_NOT_FOUND)

            closed = closed_item_error(item)
            if closed:
                return Return.err(closed)

            if command.status is not None:
                try:
                    status = SurveyItemStatus(command.status)
                except ValueError:
                    status = None
                if status not in SETTABLE_STATUSES:
                    return Return.err(
                        Error(
                            "INVALID_STATUS",
                            "Status must be one of: pending, sent, cancelled",
                        )
                    )
                _set_status(item, status)

            if command.notes is not None:
                item.notes = command.notes

            item = await self.uow.survey_items.update(item)
            await self.uow.commit()
            return Return.ok(_item_row(item))

    async def bulk_action(self, batch_id: int, action: str) -> Result[Dict[str, int]]:
        if action not in BULK_ACTIONS:
            return Return.err(
                Error("INVALID_ACTION", "Action must be one of: mark_sent, cancel")
            )
        from_statuses, target = BULK_ACTIONS[action]

        async with self.uow:
            batch = await self.uow.survey_batches.get_by_id(batch_id)
            if batch is None:
                return Return.err(BATCH_NOT_FOUND)

            affected = 0
            for item in await self.uow.survey_items.list_open_by_batch(batch_id):
                if item.status not in from_statuses:
                    continue
                _set_status(item, target)
                await self.uow.survey_items.update(item)
                affected += 1

            await self.uow.commit()
            logger.info(f"Bulk {action} on batch {batch_id}: {affected} item(s)")
            return Return.ok({"affected": affected})
