"""
Survey Configs Use Case

CRUD over reusable survey templates.
"""

from typing import Any, Dict, List, Optional

from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import SurveyConfig
from .dtos import SurveyConfigData, SurveyConfigUpdate

CONFIG_NOT_FOUND = Error("SURVEY_CONFIG_NOT_FOUND", "Survey config not found")


class SurveyConfigsUseCase:
    """
    Use case for survey configs.

    Business Rules:
    - Delete is soft: the config is deactivated and kept for its batches
    - Inactive configs are hidden from the list unless asked for
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def list(self, include_inactive: bool = False) -> Result[List[Dict[str, Any]]]:
        async with self.uow:
            configs = await self.uow.survey_configs.list_all(include_inactive)
            return Return.ok([config.model_dump() for config in configs])

    async def get(self, config_id: int) -> Result[Dict[str, Any]]:
        async with self.uow:
            config = await self.uow.survey_configs.get_by_id(config_id)
            if config is None:
                return Return.err(CONFIG_NOT_FOUND)
            return Return.ok(config.model_dump())

    async def create(
        self, data: SurveyConfigData, created_by: Optional[int] = None
    ) -> Result[Dict[str, Any]]:
        async with self.uow:
            values = data.model_dump()
            config = await self.uow.survey_configs.create(
                SurveyConfig(created_by=created_by, **values)
            )
            await self.uow.commit()
            return Return.ok(config.model_dump())

    async def update(self, config_id: int, data: SurveyConfigUpdate) -> Result[Dict[str, Any]]:
        async with self.uow:
            config = await self.uow.survey_configs.get_by_id(config_id)
            if config is None:
                return Return.err(CONFIG_NOT_FOUND)

            for key, value in data.model_dump(exclude_unset=True).items():
                if value is None and key != "description":
                    continue
                setattr(config, key, value)
            config = await self.uow.survey_configs.update(config)
            await self.uow.commit()
            return Return.ok(config.model_dump())

    async def deactivate(self, config_id: int) -> Result[Dict[str, Any]]:
        async with self.uow:
            config = await self.uow.survey_configs.get_by_id(config_id)
            if config is None:
                return Return.err(CONFIG_NOT_FOUND)

            config.is_active = False
            config = await self.uow.survey_configs.update(config)
            await self.uow.commit()
            return Return.ok(config.model_dump())
