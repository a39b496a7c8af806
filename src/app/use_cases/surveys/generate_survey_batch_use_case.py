"""
Generate Survey Batch Use Case

Resolves a survey scope to jurisdictions and queues one rendered survey
per jurisdiction that has a primary contact email.
"""

import logging
import secrets
from typing import Any, Dict, List

from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.jurisdictions.catalogue import load_jurisdiction_rows
from src.domain.entities import SurveyBatch, SurveyQueueItem, SurveyScopeType
from .dtos import GenerateCommand, GenerateResponse, PreviewResponse, ScopeCommand
from .templates import build_template_context, render_template

logger = logging.getLogger(__name__)

SAMPLE_SIZE = 5


def new_unique_id() -> str:
    return secrets.token_urlsafe(16)


def _invalid_scope(message: str) -> Error:
    return Error("INVALID_SCOPE", message)


async def resolve_scope(
    uow: UnitOfWork, command: ScopeCommand
) -> Result[List[Dict[str, Any]]]:
    """
    Catalogue rows targeted by a scope. Rows without research are dropped.

    Scopes:
    - all
    - state: {state}
    - county: {state, county_name}, the county and its municipalities
    - jurisdictions: {research_ids}
    """
    try:
        scope_type = SurveyScopeType(command.scope_type)
    except ValueError:
        return Return.err(_invalid_scope(f"Invalid scope type: {command.scope_type}"))

    scope_filter = command.scope_filter or {}
    state = None
    if scope_type in (SurveyScopeType.state, SurveyScopeType.county):
        state = scope_filter.get("state")
        if not state:
            return Return.err(_invalid_scope("scopeFilter.state is required"))

    rows = await load_jurisdiction_rows(uow, state=state)

    if scope_type == SurveyScopeType.county:
        county_name = scope_filter.get("county_name")
        if not county_name:
            return Return.err(_invalid_scope("scopeFilter.countyName is required"))
        names = {county_name, f"{county_name} County"}
        if county_name.endswith(" County"):
            names.add(county_name[: -len(" County")])
        rows = [row for row in rows if row["county_name"] in names]

    elif scope_type == SurveyScopeType.jurisdictions:
        research_ids = scope_filter.get("research_ids")
        if not isinstance(research_ids, list) or not research_ids:
            return Return.err(_invalid_scope("scopeFilter.researchIds is required"))
        wanted = {int(rid) for rid in research_ids}
        rows = [row for row in rows if row["research_id"] in wanted]

    return Return.ok([row for row in rows if row["research_id"] is not None])


def _sample_row(row: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "research_id": row["research_id"],
        "display_name": row["display_name"],
        "state": row["state"],
        "county_name": row["county_name"],
        "contact_name": row.get("primary_contact_name"),
        "contact_email": row.get("primary_contact_email"),
    }


class GenerateSurveyBatchUseCase:
    """
    Use case for previewing and generating survey batches.

    Business Rules:
    - Only active survey configs can generate
    - One pending item per in-scope jurisdiction with a contact email;
      the rest are counted as skipped
    - Each item gets its own unguessable unique_id and rendered copy
    """

    def __init__(self, uow: UnitOfWork, survey_base_url: str):
        self.uow = uow
        self.survey_base_url = survey_base_url

    async def preview(self, command: ScopeCommand) -> Result[PreviewResponse]:
        async with self.uow:
            resolved = await resolve_scope(self.uow, command)
            if resolved.is_err():
                return Return.err(resolved.error)

            rows = resolved.value
            with_email = [row for row in rows if row.get("primary_contact_email")]
            return Return.ok(
                PreviewResponse(
                    total=len(rows),
                    with_email=len(with_email),
                    without_email=len(rows) - len(with_email),
                    sample=[_sample_row(row) for row in rows[:SAMPLE_SIZE]],
                )
            )

    async def generate(self, command: GenerateCommand) -> Result[GenerateResponse]:
        """
        Create a batch and its queue items in one transaction.

        Returns:
            Result with GenerateResponse, or Error
            (SURVEY_CONFIG_NOT_FOUND, INVALID_SCOPE)
        """
        async with self.uow:
            config = await self.uow.survey_configs.get_by_id(command.survey_config_id)
            if config is None or not config.is_active:
                return Return.err(
                    Error("SURVEY_CONFIG_NOT_FOUND", "Survey config not found")
                )

            resolved = await resolve_scope(self.uow, command)
            if resolved.is_err():
                return Return.err(resolved.error)

            batch = await self.uow.survey_batches.create(
                SurveyBatch(
                    survey_config_id=config.id,
                    scope_type=SurveyScopeType(command.scope_type),
                    scope_filter=command.scope_filter,
                    created_by=command.created_by,
                )
            )

            created = skipped = 0
            for row in resolved.value:
                email = row.get("primary_contact_email")
                if not email:
                    skipped += 1
                    continue

                unique_id = new_unique_id()
                context = build_template_context(row, unique_id, self.survey_base_url)
                await self.uow.survey_items.create(
                    SurveyQueueItem(
                        batch_id=batch.id,
                        research_id=row["research_id"],
                        unique_id=unique_id,
                        recipient_name=row.get("primary_contact_name"),
                        recipient_email=email,
                        rendered_subject=render_template(config.subject_template, context),
                        rendered_body=render_template(config.body_template, context),
                    )
                )
                created += 1

            await self.uow.commit()

            logger.info(
                f"Survey batch {batch.id} generated: {created} queued, {skipped} skipped"
            )
            return Return.ok(
                GenerateResponse(batch_id=batch.id, created=created, skipped=skipped)
            )
