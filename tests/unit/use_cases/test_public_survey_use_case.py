from unittest.mock import AsyncMock, MagicMock

import pytest

from src.app.use_cases.surveys import PublicSurveyUseCase
from src.domain.entities import ResearchResult, SurveyItemStatus, SurveyQueueItem


@pytest.fixture
def mock_uow(mock_uow):
    mock_uow.survey_items = MagicMock()
    mock_uow.survey_items.get_by_unique_id_for_update = AsyncMock()
    mock_uow.survey_items.update = AsyncMock(side_effect=lambda item: item)

    mock_uow.research = MagicMock()
    mock_uow.research.get_for_update = AsyncMock()
    mock_uow.research.update = AsyncMock(side_effect=lambda research: research)

    mock_uow.audit_trail = MagicMock()
    mock_uow.audit_trail.record_edit = AsyncMock(return_value=MagicMock())
    return mock_uow


def _item(status=SurveyItemStatus.pending):
    return SurveyQueueItem(
        id=1,
        batch_id=1,
        research_id=5,
        unique_id="link-123",
        recipient_email="treasurer@example.com",
        status=status,
    )


@pytest.mark.asyncio
async def test_submit_applies_changed_fields_only(mock_uow):
    """Test survey answers update research, skipping unchanged and non-field keys"""
    # Arrange
    item = _item()
    research = ResearchResult(id=5, county_id=1, current_tax_year=2024, notes="same")
    mock_uow.survey_items.get_by_unique_id_for_update.return_value = item
    mock_uow.research.get_for_update.return_value = research

    # Act
    result = await PublicSurveyUseCase(mock_uow).submit(
        "link-123",
        {"current_tax_year": 2025, "notes": "same", "favourite_colour": "blue"},
        ip_address="198.51.100.1",
    )

    # Assert
    assert result.is_ok()
    assert result.value.fields_updated == ["current_tax_year"]
    mock_uow.survey_items.get_by_unique_id_for_update.assert_called_once_with("link-123")
    assert research.current_tax_year == 2025

    mock_uow.audit_trail.record_edit.assert_called_once()
    audit = mock_uow.audit_trail.record_edit.call_args.kwargs
    assert audit["user_id"] is None
    assert audit["username"] == "survey:treasurer@example.com"
    assert audit["edit_reason"] == "Survey response link-123"
    assert audit["ip_address"] == "198.51.100.1"

    assert item.status == SurveyItemStatus.completed
    assert item.completed_at is not None
    assert item.responses["favourite_colour"] == "blue"
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_submit_without_research_fields(mock_uow):
    item = _item(status=SurveyItemStatus.sent)
    mock_uow.survey_items.get_by_unique_id_for_update.return_value = item

    result = await PublicSurveyUseCase(mock_uow).submit("link-123", {"comments": "hi"})

    assert result.value.fields_updated == []
    mock_uow.research.get_for_update.assert_not_called()
    assert item.status == SurveyItemStatus.completed


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status, code",
    [
        (SurveyItemStatus.completed, "ITEM_COMPLETED"),
        (SurveyItemStatus.cancelled, "ITEM_CANCELLED"),
    ],
)
async def test_closed_items_reject_submission(mock_uow, status, code):
    mock_uow.survey_items.get_by_unique_id_for_update.return_value = _item(status=status)

    result = await PublicSurveyUseCase(mock_uow).submit("link-123", {"notes": "x"})

    assert result.error.code == code
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_unknown_link(mock_uow):
    mock_uow.survey_items.get_by_unique_id_for_update.return_value = None

    result = await PublicSurveyUseCase(mock_uow).submit("nope", {})

    assert result.error.code == "SURVEY_NOT_FOUND"


@pytest.mark.asyncio
async def test_invalid_answer_aborts_submission(mock_uow):
    item = _item()
    mock_uow.survey_items.get_by_unique_id_for_update.return_value = item
    mock_uow.research.get_for_update.return_value = ResearchResult(id=5, county_id=1)

    result = await PublicSurveyUseCase(mock_uow).submit(
        "link-123", {"num_installments": "lots"}
    )

    assert result.error.code == "INVALID_VALUE"
    assert item.status == SurveyItemStatus.pending
    mock_uow.commit.assert_not_called()
