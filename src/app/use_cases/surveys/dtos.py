"""
Survey Use Case DTOs

Commands and responses for survey templates, queue generation and the
public response form.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from src.libs.schema import CamelModel


class SurveyQuestion(BaseModel):
    """One question; key names the research field it feeds, if any"""

    key: str = Field(..., min_length=1)
    label: str
    type: str = "text"


class SurveyConfigData(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    subject_template: str = ""
    body_template: str = ""
    questions: List[SurveyQuestion] = Field(default_factory=list)


class SurveyConfigUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    subject_template: Optional[str] = None
    body_template: Optional[str] = None
    questions: Optional[List[SurveyQuestion]] = None
    is_active: Optional[bool] = None


class ScopeCommand(BaseModel):
    """Which jurisdictions a survey batch targets"""

    scope_type: str = "all"
    scope_filter: Dict[str, Any] = Field(default_factory=dict)


class GenerateCommand(ScopeCommand):
    survey_config_id: int
    created_by: Optional[int] = None


class PreviewResponse(CamelModel):
    total: int
    with_email: int
    without_email: int
    sample: List[Dict[str, Any]]


class GenerateResponse(CamelModel):
    success: bool = True
    batch_id: int
    created: int
    skipped: int


class ItemPage(CamelModel):
    data: List[Dict[str, Any]]
    total: int
    page: int
    limit: int
    total_pages: int


class UpdateItemCommand(BaseModel):
    status: Optional[str] = None
    notes: Optional[str] = None


class PublicSurvey(CamelModel):
    """What a recipient sees when opening their survey link"""

    unique_id: str
    jurisdiction_name: str
    state: Optional[str] = None
    questions: List[Dict[str, Any]]
    subject: Optional[str] = None
    body: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None


class SubmitSurveyResponse(CamelModel):
    success: bool = True
    message: str = "Thank you for your response"
    fields_updated: List[str]
