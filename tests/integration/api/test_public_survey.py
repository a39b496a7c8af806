import pytest
import pytest_asyncio
from httpx import AsyncClient


@pytest_asyncio.fixture
async def survey(client, seed, user_headers):
    """One pending survey for Dane County; returns ids and the public link id"""
    county_id = await seed.county(state="WI", county_name="Dane County")
    research_id = await seed.research(
        county_id,
        current_tax_year=2024,
        notes="unchanged",
        primary_contact_email="treasurer@example.com",
    )
    config_id = await seed.survey_config()

    response = await client.post(
        "/survey-queue/generate",
        json={"surveyConfigId": config_id},
        headers=user_headers,
    )
    batch_id = response.json()["batchId"]
    items = await client.get(
        "/survey-queue/items", params={"batchId": batch_id}, headers=user_headers
    )
    item = items.json()["data"][0]
    return {
        "research_id": research_id,
        "item_id": item["id"],
        "unique_id": item["unique_id"],
    }


@pytest.mark.asyncio
async def test_get_public_survey(client: AsyncClient, survey):
    response = await client.get(f"/public/survey/{survey['unique_id']}")

    assert response.status_code == 200
    data = response.json()
    assert data["uniqueId"] == survey["unique_id"]
    assert data["jurisdictionName"] == "Dane County"
    assert data["state"] == "WI"
    assert data["status"] == "pending"
    assert [q["key"] for q in data["questions"]] == ["current_tax_year", "comments"]
    assert data["subject"] == "Tax info for Dane County"


@pytest.mark.asyncio
async def test_unknown_survey_link(client: AsyncClient):
    response = await client.get("/public/survey/does-not-exist")

    assert response.status_code == 404
    assert response.json()["code"] == "SURVEY_NOT_FOUND"


@pytest.mark.asyncio
async def test_submit_writes_back_research(client: AsyncClient, survey, user_headers):
    """Survey response

    Given a pending survey
    When the recipient submits answers
    Then answers naming editable fields update the research result
    And only changed fields are audited, attributed to the recipient
    And the survey is completed and cannot be submitted again
    """
    url = f"/public/survey/{survey['unique_id']}"

    response = await client.post(url, json={"responses": {
        "current_tax_year": "2025",
        "notes": "unchanged",
        "due_date_1": "1/31/26",
        "comments": "Happy to help",
    }})

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["fieldsUpdated"] == ["current_tax_year", "due_date_1"]

    research = await client.get(f"/research/{survey['research_id']}", headers=user_headers)
    assert research.json()["research"]["current_tax_year"] == 2025
    assert research.json()["research"]["due_date_1"] == "2026-01-31"

    history = await client.get(
        f"/counties/{survey['research_id']}/edit-history", headers=user_headers
    )
    entries = history.json()["editHistory"]
    assert {e["field_name"] for e in entries} == {"current_tax_year", "due_date_1"}
    assert all(e["username"] == "survey:treasurer@example.com" for e in entries)
    assert all(e["user_id"] is None for e in entries)
    assert all(
        e["edit_reason"] == f"Survey response {survey['unique_id']}" for e in entries
    )

    items = await client.get(
        "/survey-queue/items", params={"status": "completed"}, headers=user_headers
    )
    completed = items.json()["data"][0]
    assert completed["responses"]["comments"] == "Happy to help"
    assert completed["completed_at"] is not None

    response = await client.post(url, json={"responses": {}})
    assert response.status_code == 409
    assert response.json()["code"] == "ITEM_COMPLETED"

    response = await client.get(url)
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_submit_invalid_value_changes_nothing(
    client: AsyncClient, survey, user_headers
):
    url = f"/public/survey/{survey['unique_id']}"

    response = await client.post(url, json={"responses": {
        "current_tax_year": "2025",
        "num_installments": 42,
    }})

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_VALUE"

    history = await client.get(
        f"/counties/{survey['research_id']}/edit-history", headers=user_headers
    )
    assert history.json()["totalEdits"] == 0

    response = await client.get(url)
    assert response.json()["status"] == "pending"


@pytest.mark.asyncio
async def test_cancelled_survey_is_gone(client: AsyncClient, survey, user_headers):
    await client.patch(
        f"/survey-queue/items/{survey['item_id']}",
        json={"status": "cancelled"},
        headers=user_headers,
    )

    response = await client.post(
        f"/public/survey/{survey['unique_id']}", json={"responses": {"notes": "late"}}
    )

    assert response.status_code == 410
    assert response.json()["code"] == "ITEM_CANCELLED"
