import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_update_field_records_audit(client: AsyncClient, seed, user_headers):
    """Audited edit

    Given a research result
    When I PATCH one field with a reason
    Then the value changes
    And the audit trail holds old value, new value, editor and reason
    """
    county_id = await seed.county()
    research_id = await seed.research(county_id, primary_contact_name="Old Name")

    response = await client.patch(
        f"/counties/{research_id}",
        json={
            "field": "primary_contact_name",
            "value": "New Name",
            "editReason": "Called the office",
        },
        headers={**user_headers, "X-Forwarded-For": "198.51.100.7"},
    )

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": "Field updated successfully",
        "auditLogged": True,
    }

    response = await client.get(
        f"/counties/{research_id}/edit-history", headers=user_headers
    )
    assert response.status_code == 200
    data = response.json()
    assert data["totalEdits"] == 1
    entry = data["editHistory"][0]
    assert entry["field_name"] == "primary_contact_name"
    assert entry["old_value"] == "Old Name"
    assert entry["new_value"] == "New Name"
    assert entry["username"] == "researcher"
    assert entry["edit_reason"] == "Called the office"
    assert entry["ip_address"] == "198.51.100.7"

    response = await client.get(f"/research/{research_id}", headers=user_headers)
    assert response.json()["research"]["primary_contact_name"] == "New Name"


@pytest.mark.asyncio
async def test_update_due_date_is_normalized(client: AsyncClient, seed, user_headers):
    county_id = await seed.county()
    research_id = await seed.research(county_id)

    response = await client.patch(
        f"/counties/{research_id}",
        json={"field": "due_date_1", "value": "1/31/25"},
        headers=user_headers,
    )
    assert response.status_code == 200

    response = await client.get(f"/research/{research_id}", headers=user_headers)
    assert response.json()["research"]["due_date_1"] == "2025-01-31"


@pytest.mark.asyncio
async def test_update_clears_date_field(client: AsyncClient, seed, user_headers):
    from datetime import date

    county_id = await seed.county()
    research_id = await seed.research(county_id, tax_billing_date=date(2024, 11, 1))

    response = await client.patch(
        f"/counties/{research_id}",
        json={"field": "tax_billing_date", "value": ""},
        headers=user_headers,
    )
    assert response.status_code == 200

    history = await client.get(
        f"/counties/{research_id}/edit-history", headers=user_headers
    )
    entry = history.json()["editHistory"][0]
    assert entry["old_value"] == "2024-11-01"
    assert entry["new_value"] is None


@pytest.mark.asyncio
async def test_update_rejects_field_outside_allow_list(
    client: AsyncClient, seed, user_headers
):
    county_id = await seed.county()
    research_id = await seed.research(county_id)

    response = await client.patch(
        f"/counties/{research_id}",
        json={"field": "county_id", "value": 99},
        headers=user_headers,
    )

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_FIELD"

    history = await client.get(
        f"/counties/{research_id}/edit-history", headers=user_headers
    )
    assert history.json()["totalEdits"] == 0


@pytest.mark.asyncio
async def test_update_rejects_bad_installment_count(
    client: AsyncClient, seed, user_headers
):
    county_id = await seed.county()
    research_id = await seed.research(county_id)

    response = await client.patch(
        f"/counties/{research_id}",
        json={"field": "num_installments", "value": 11},
        headers=user_headers,
    )

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_VALUE"


@pytest.mark.asyncio
async def test_update_unknown_research(client: AsyncClient, user_headers):
    response = await client.patch(
        "/counties/4242",
        json={"field": "notes", "value": "hello"},
        headers=user_headers,
    )

    assert response.status_code == 404
    assert response.json()["code"] == "RESEARCH_NOT_FOUND"


@pytest.mark.asyncio
async def test_update_requires_value(client: AsyncClient, seed, user_headers):
    county_id = await seed.county()
    research_id = await seed.research(county_id)

    response = await client.patch(
        f"/counties/{research_id}", json={"field": "notes"}, headers=user_headers
    )

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_versions_newest_first_with_edit_counts(
    client: AsyncClient, seed, user_headers
):
    """Version listing

    Given a county researched twice
    When I list versions from the older research id
    Then both versions come back newest first
    And each carries its own edit count
    """
    county_id = await seed.county()
    old_id = await seed.research(county_id, days_ago=30, method_used="scrape")
    new_id = await seed.research(county_id, days_ago=1, method_used="manual")
    await seed.audit(old_id)
    await seed.audit(old_id)

    response = await client.get(f"/counties/{old_id}/versions", headers=user_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["currentResearchId"] == old_id
    assert data["countyId"] == county_id
    assert data["totalVersions"] == 2
    assert [v["id"] for v in data["versions"]] == [new_id, old_id]
    assert [v["edit_count"] for v in data["versions"]] == [0, 2]
    assert data["versions"][0]["last_edit_date"] is None
    assert data["versions"][1]["last_edit_date"] is not None


@pytest.mark.asyncio
async def test_get_research_and_evidence(client: AsyncClient, seed, user_headers):
    county_id = await seed.county(county_name="Dane County")
    research_id = await seed.research(county_id)

    response = await client.get(f"/research/{research_id}", headers=user_headers)

    assert response.status_code == 200
    research = response.json()["research"]
    assert research["id"] == research_id
    assert research["county_id"] == county_id
    assert research["display_name"] == "Dane County"
    assert research["jurisdiction_type"] == "county"

    response = await client.get(f"/screenshots/{research_id}", headers=user_headers)
    assert response.status_code == 200
    assert response.json() == []

    response = await client.get(f"/source-data/{research_id}", headers=user_headers)
    assert response.status_code == 200
    assert response.json() == []

    response = await client.get("/research/777", headers=user_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_update_accepts_snake_case_reason(client: AsyncClient, seed, user_headers):
    county_id = await seed.county()
    research_id = await seed.research(county_id)

    response = await client.patch(
        f"/counties/{research_id}",
        json={"field": "notes", "value": "checked", "edit_reason": "Legacy client"},
        headers=user_headers,
    )
    assert response.status_code == 200

    history = await client.get(
        f"/counties/{research_id}/edit-history", headers=user_headers
    )
    assert history.json()["editHistory"][0]["edit_reason"] == "Legacy client"
