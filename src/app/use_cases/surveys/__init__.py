"""
Survey Use Cases

Survey templates, queue generation, queue management and the public
response form.
"""

from .dtos import (
    SurveyQuestion,
    SurveyConfigData,
    SurveyConfigUpdate,
    ScopeCommand,
    GenerateCommand,
    PreviewResponse,
    GenerateResponse,
    ItemPage,
    UpdateItemCommand,
    PublicSurvey,
    SubmitSurveyResponse,
)
from .templates import build_template_context, render_template, survey_link
from .survey_configs_use_case import SurveyConfigsUseCase
from .generate_survey_batch_use_case import GenerateSurveyBatchUseCase, resolve_scope
from .survey_queue_use_case import SurveyQueueUseCase
from .public_survey_use_case import PublicSurveyUseCase

__all__ = [
    "SurveyQuestion",
    "SurveyConfigData",
    "SurveyConfigUpdate",
    "ScopeCommand",
    "GenerateCommand",
    "PreviewResponse",
    "GenerateResponse",
    "ItemPage",
    "UpdateItemCommand",
    "PublicSurvey",
    "SubmitSurveyResponse",
    "build_template_context",
    "render_template",
    "survey_link",
    "SurveyConfigsUseCase",
    "GenerateSurveyBatchUseCase",
    "resolve_scope",
    "SurveyQueueUseCase",
    "PublicSurveyUseCase",
]
