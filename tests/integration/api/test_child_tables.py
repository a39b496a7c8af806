import pytest
import pytest_asyncio
from httpx import AsyncClient


@pytest_asyncio.fixture
async def research_id(seed):
    county_id = await seed.county()
    return await seed.research(county_id)


# ============================================================================
# Installments
# ============================================================================


@pytest.mark.asyncio
async def test_installment_crud(client: AsyncClient, research_id, user_headers):
    response = await client.post(
        f"/counties/{research_id}/installments",
        json={"installment_number": 2, "due_date": "2025-07-31", "delq_collector": "County"},
        headers=user_headers,
    )
    assert response.status_code == 201
    installment = response.json()["installment"]
    assert installment["installment_number"] == 2
    assert installment["due_date"] == "2025-07-31"

    await client.post(
        f"/counties/{research_id}/installments",
        json={"installment_number": 1, "due_date": "2025-01-31"},
        headers=user_headers,
    )

    response = await client.get(
        f"/counties/{research_id}/installments", headers=user_headers
    )
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["researchId"] == research_id
    assert [i["installment_number"] for i in data["installments"]] == [1, 2]

    # Partial update keeps the fields that were not sent
    response = await client.put(
        f"/installments/{installment['id']}",
        json={"escrow_collector": "Bank", "due_date": ""},
        headers=user_headers,
    )
    assert response.status_code == 200
    updated = response.json()["installment"]
    assert updated["escrow_collector"] == "Bank"
    assert updated["delq_collector"] == "County"
    assert updated["due_date"] is None

    response = await client.delete(
        f"/installments/{installment['id']}", headers=user_headers
    )
    assert response.status_code == 200
    assert response.json() == {"success": True}

    response = await client.delete(
        f"/installments/{installment['id']}", headers=user_headers
    )
    assert response.status_code == 404
    assert response.json()["code"] == "INSTALLMENT_NOT_FOUND"


@pytest.mark.asyncio
async def test_installment_number_range(client: AsyncClient, research_id, user_headers):
    response = await client.post(
        f"/counties/{research_id}/installments",
        json={"installment_number": 11},
        headers=user_headers,
    )
    assert response.status_code == 400
    assert response.json() == {
        "error": "Installment number must be between 1 and 10",
        "code": "INVALID_INSTALLMENT_NUMBER",
    }

    response = await client.put(
        f"/counties/{research_id}/installments/0", json={}, headers=user_headers
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_duplicate_installment_number(client: AsyncClient, research_id, user_headers):
    payload = {"installment_number": 1}
    await client.post(
        f"/counties/{research_id}/installments", json=payload, headers=user_headers
    )

    response = await client.post(
        f"/counties/{research_id}/installments", json=payload, headers=user_headers
    )

    assert response.status_code == 409
    assert response.json()["code"] == "INSTALLMENT_EXISTS"


@pytest.mark.asyncio
async def test_installment_upsert_by_number(client: AsyncClient, research_id, user_headers):
    url = f"/counties/{research_id}/installments/3"

    response = await client.put(url, json={"notes": "first"}, headers=user_headers)
    assert response.status_code == 200
    first = response.json()["installment"]
    assert first["installment_number"] == 3

    response = await client.put(
        url, json={"due_date": "2025-10-31"}, headers=user_headers
    )
    second = response.json()["installment"]
    assert second["id"] == first["id"]
    assert second["notes"] == "first"
    assert second["due_date"] == "2025-10-31"

    response = await client.delete(url, headers=user_headers)
    assert response.status_code == 200

    response = await client.delete(url, headers=user_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_installments_of_unknown_research(client: AsyncClient, user_headers):
    response = await client.get("/counties/999/installments", headers=user_headers)

    assert response.status_code == 404
    assert response.json()["code"] == "RESEARCH_NOT_FOUND"


# ============================================================================
# Contacts
# ============================================================================


@pytest.mark.asyncio
async def test_contact_defaults_and_reorder(client: AsyncClient, research_id, user_headers):
    """Contact ordering

    Given three contacts
    When I reorder them
    Then the list follows the new order
    """
    ids = []
    for name, contact_type in (("Ann", None), ("Bob", "billing"), ("Cy", "secondary")):
        response = await client.post(
            f"/counties/{research_id}/contacts",
            json={"name": name, "contact_type": contact_type},
            headers=user_headers,
        )
        assert response.status_code == 201
        ids.append(response.json()["contact"]["id"])

    response = await client.get(f"/counties/{research_id}/contacts", headers=user_headers)
    contacts = response.json()["contacts"]
    by_name = {contact["name"]: contact for contact in contacts}
    assert by_name["Ann"]["contact_type"] == "primary"
    assert [contact["name"] for contact in contacts] == ["Bob", "Ann", "Cy"]
    assert all(contact["sort_order"] == 0 for contact in contacts)

    reversed_ids = list(reversed(ids))
    response = await client.put(
        f"/counties/{research_id}/contacts/reorder",
        json={"orderedIds": reversed_ids + [12345]},
        headers=user_headers,
    )
    assert response.status_code == 200
    assert response.json()["updated"] == 3

    response = await client.get(f"/counties/{research_id}/contacts", headers=user_headers)
    assert [contact["id"] for contact in response.json()["contacts"]] == reversed_ids


@pytest.mark.asyncio
async def test_contact_update_delete_and_types(
    client: AsyncClient, research_id, user_headers
):
    response = await client.post(
        f"/counties/{research_id}/contacts",
        json={"name": "Ann", "contact_type": "zoning"},
        headers=user_headers,
    )
    contact_id = response.json()["contact"]["id"]
    await client.post(
        f"/counties/{research_id}/contacts",
        json={"name": "Bob", "contact_type": "billing"},
        headers=user_headers,
    )

    response = await client.get("/contact-types", headers=user_headers)
    assert response.json() == ["billing", "zoning"]

    response = await client.put(
        f"/contacts/{contact_id}", json={"phone": "555-0100"}, headers=user_headers
    )
    assert response.status_code == 200
    contact = response.json()["contact"]
    assert contact["phone"] == "555-0100"
    assert contact["name"] == "Ann"

    response = await client.delete(f"/contacts/{contact_id}", headers=user_headers)
    assert response.status_code == 200

    response = await client.put(
        f"/contacts/{contact_id}", json={"phone": "x"}, headers=user_headers
    )
    assert response.status_code == 404
    assert response.json()["code"] == "CONTACT_NOT_FOUND"


# ============================================================================
# Fees
# ============================================================================


@pytest.mark.asyncio
async def test_fee_crud(client: AsyncClient, research_id, user_headers):
    response = await client.post(
        f"/counties/{research_id}/fees",
        json={"fee_type": "Late fee", "fee_amount": "25.50"},
        headers=user_headers,
    )
    assert response.status_code == 201
    fee = response.json()["fee"]
    assert fee["fee_category"] == "delq"
    assert fee["fee_number"] == 1
    assert float(fee["fee_amount"]) == 25.5

    await client.post(
        f"/counties/{research_id}/fees",
        json={"fee_category": "escrow", "fee_type": "Search fee"},
        headers=user_headers,
    )

    response = await client.get(f"/counties/{research_id}/fees", headers=user_headers)
    assert [f["fee_category"] for f in response.json()["fees"]] == ["delq", "escrow"]

    response = await client.get("/fee-types", headers=user_headers)
    assert response.json() == ["Late fee", "Search fee"]

    response = await client.put(
        f"/fees/{fee['id']}", json={"fee_amount": ""}, headers=user_headers
    )
    assert response.status_code == 200
    assert response.json()["fee"]["fee_amount"] is None
    assert response.json()["fee"]["fee_type"] == "Late fee"

    response = await client.delete(f"/fees/{fee['id']}", headers=user_headers)
    assert response.status_code == 200

    response = await client.delete(f"/fees/{fee['id']}", headers=user_headers)
    assert response.status_code == 404
    assert response.json()["code"] == "FEE_NOT_FOUND"


@pytest.mark.asyncio
async def test_child_tables_require_auth(client: AsyncClient, research_id):
    response = await client.get(f"/counties/{research_id}/fees")

    assert response.status_code == 401
