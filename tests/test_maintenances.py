from datetime import date, timedelta

import pytest

from conftest import create_asset, create_maintenance


@pytest.mark.anyio
async def test_create_maintenance_defaults(async_client, owner):
    asset = await create_asset(async_client, owner["headers"], "Car")
    due = (date.today() + timedelta(days=30)).isoformat()

    resp = await async_client.post(
        "/api/maintenances",
        json={
            "asset_id": asset["id"],
            "service_description": "Oil change",
            "next_due_date": due,
            "notes": "Use 5W-30",
        },
        headers=owner["headers"],
    )
    assert resp.status_code == 201, resp.text
    data = resp.json()
    assert data["message"] == "Maintenance log created successfully."
    m = data["maintenance"]
    assert m["asset_id"] == asset["id"]
    assert m["is_completed"] is False
    assert m["completion_date"] is None
    assert m["next_due_date"] == due
    assert m["notes"] == "Use 5W-30"


@pytest.mark.anyio
async def test_create_completed_requires_completion_date(async_client, owner):
    asset = await create_asset(async_client, owner["headers"], "Car")
    payload = {"asset_id": asset["id"], "service_description": "Brake pads", "is_completed": True}

    resp = await async_client.post("/api/maintenances", json=payload, headers=owner["headers"])
    assert resp.status_code == 400
    assert resp.json()["message"] == (
        "Completion date is required if maintenance is marked as completed."
    )

    payload["completion_date"] = date.today().isoformat()
    resp = await async_client.post("/api/maintenances", json=payload, headers=owner["headers"])
    assert resp.status_code == 201, resp.text
    m = resp.json()["maintenance"]
    assert m["is_completed"] is True
    assert m["completion_date"] == date.today().isoformat()


@pytest.mark.anyio
async def test_create_with_empty_date_strings(async_client, owner):
    asset = await create_asset(async_client, owner["headers"], "Car")
    m = await create_maintenance(
        async_client, owner["headers"], asset["id"], completion_date="", next_due_date="", notes=""
    )
    assert m["completion_date"] is None
    assert m["next_due_date"] is None
    assert m["notes"] is None


@pytest.mark.anyio
@pytest.mark.parametrize(
    "payload",
    [
        {"service_description": "Oil change"},
        {"asset_id": 1},
        {"asset_id": 1, "service_description": ""},
    ],
)
async def test_create_requires_asset_and_description(async_client, owner, payload):
    resp = await async_client.post("/api/maintenances", json=payload, headers=owner["headers"])
    assert resp.status_code == 400
    assert resp.json()["message"] == "Asset ID and service description are required."


@pytest.mark.anyio
async def test_create_on_foreign_or_missing_asset(async_client, owner, intruder):
    asset = await create_asset(async_client, owner["headers"], "Car")

    resp = await async_client.post(
        "/api/maintenances",
        json={"asset_id": asset["id"], "service_description": "Sneaky"},
        headers=intruder["headers"],
    )
    assert resp.status_code == 404

    resp = await async_client.post(
        "/api/maintenances",
        json={"asset_id": asset["id"] + 100000, "service_description": "Ghost"},
        headers=owner["headers"],
    )
    assert resp.status_code == 404


@pytest.mark.anyio
async def test_create_rejects_bad_date(async_client, owner):
    asset = await create_asset(async_client, owner["headers"], "Car")
    resp = await async_client.post(
        "/api/maintenances",
        json={"asset_id": asset["id"], "service_description": "Oil", "next_due_date": "someday"},
        headers=owner["headers"],
    )
    assert resp.status_code == 400


@pytest.mark.anyio
async def test_list_maintenances_newest_first(async_client, owner):
    asset = await create_asset(async_client, owner["headers"], "Car")
    first = await create_maintenance(async_client, owner["headers"], asset["id"], service_description="First")
    second = await create_maintenance(async_client, owner["headers"], asset["id"], service_description="Second")

    other_asset = await create_asset(async_client, owner["headers"], "Boat")
    await create_maintenance(async_client, owner["headers"], other_asset["id"], service_description="Hull")

    resp = await async_client.get(f"/api/maintenances/asset/{asset['id']}", headers=owner["headers"])
    assert resp.status_code == 200
    ids = [m["id"] for m in resp.json()["maintenances"]]
    assert ids == [second["id"], first["id"]]


@pytest.mark.anyio
async def test_get_single_maintenance(async_client, owner):
    asset = await create_asset(async_client, owner["headers"], "Car")
    m = await create_maintenance(async_client, owner["headers"], asset["id"])

    resp = await async_client.get(
        f"/api/maintenances/asset/{asset['id']}/{m['id']}", headers=owner["headers"]
    )
    assert resp.status_code == 200
    assert resp.json()["maintenance"]["id"] == m["id"]


@pytest.mark.anyio
async def test_maintenance_under_other_asset_is_not_found(async_client, owner):
    car = await create_asset(async_client, owner["headers"], "Car")
    boat = await create_asset(async_client, owner["headers"], "Boat")
    m = await create_maintenance(async_client, owner["headers"], car["id"])

    url = f"/api/maintenances/asset/{boat['id']}/{m['id']}"
    assert (await async_client.get(url, headers=owner["headers"])).status_code == 404
    assert (
        await async_client.put(url, json={"notes": "x"}, headers=owner["headers"])
    ).status_code == 404
    assert (await async_client.delete(url, headers=owner["headers"])).status_code == 404

    # Untouched under its real asset
    resp = await async_client.get(
        f"/api/maintenances/asset/{car['id']}/{m['id']}", headers=owner["headers"]
    )
    assert resp.status_code == 200
    assert resp.json()["maintenance"]["notes"] is None


@pytest.mark.anyio
async def test_intruder_gets_not_found_everywhere(async_client, owner, intruder):
    asset = await create_asset(async_client, owner["headers"], "Car")
    m = await create_maintenance(async_client, owner["headers"], asset["id"])
    url = f"/api/maintenances/asset/{asset['id']}/{m['id']}"

    responses = [
        await async_client.get(f"/api/maintenances/asset/{asset['id']}", headers=intruder["headers"]),
        await async_client.get(url, headers=intruder["headers"]),
        await async_client.put(url, json={"notes": "pwned"}, headers=intruder["headers"]),
        await async_client.delete(url, headers=intruder["headers"]),
    ]
    for resp in responses:
        assert resp.status_code == 404

    resp = await async_client.get(url, headers=owner["headers"])
    assert resp.status_code == 200
    assert resp.json()["maintenance"]["notes"] is None


@pytest.mark.anyio
async def test_update_empty_date_clears_it(async_client, owner):
    asset = await create_asset(async_client, owner["headers"], "Car")
    m = await create_maintenance(
        async_client,
        owner["headers"],
        asset["id"],
        completion_date="2024-01-10",
        next_due_date="2024-07-10",
    )
    url = f"/api/maintenances/asset/{asset['id']}/{m['id']}"

    resp = await async_client.put(url, json={"completion_date": ""}, headers=owner["headers"])
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["completion_date"] is None
    # Absent from the payload means unchanged
    assert data["next_due_date"] == "2024-07-10"

    resp = await async_client.get(url, headers=owner["headers"])
    assert resp.json()["maintenance"]["completion_date"] is None


@pytest.mark.anyio
async def test_update_only_touches_supplied_fields(async_client, owner):
    asset = await create_asset(async_client, owner["headers"], "Car")
    m = await create_maintenance(
        async_client, owner["headers"], asset["id"], next_due_date="2030-01-01", notes="Before"
    )
    url = f"/api/maintenances/asset/{asset['id']}/{m['id']}"

    resp = await async_client.put(url, json={"notes": "After"}, headers=owner["headers"])
    assert resp.status_code == 200
    data = resp.json()
    assert data["notes"] == "After"
    assert data["service_description"] == "Oil change"
    assert data["next_due_date"] == "2030-01-01"
    assert data["is_completed"] is False
    assert data["updated_at"]


@pytest.mark.anyio
async def test_update_requires_a_field(async_client, owner):
    asset = await create_asset(async_client, owner["headers"], "Car")
    m = await create_maintenance(async_client, owner["headers"], asset["id"])
    resp = await async_client.put(
        f"/api/maintenances/asset/{asset['id']}/{m['id']}", json={}, headers=owner["headers"]
    )
    assert resp.status_code == 400
    assert "At least one field" in resp.json()["message"]


@pytest.mark.anyio
async def test_update_rejects_blank_description(async_client, owner):
    asset = await create_asset(async_client, owner["headers"], "Car")
    m = await create_maintenance(async_client, owner["headers"], asset["id"])
    resp = await async_client.put(
        f"/api/maintenances/asset/{asset['id']}/{m['id']}",
        json={"service_description": "  "},
        headers=owner["headers"],
    )
    assert resp.status_code == 400


@pytest.mark.anyio
async def test_complete_without_any_date_fails(async_client, owner):
    asset = await create_asset(async_client, owner["headers"], "Car")
    m = await create_maintenance(async_client, owner["headers"], asset["id"])
    url = f"/api/maintenances/asset/{asset['id']}/{m['id']}"

    resp = await async_client.put(url, json={"is_completed": True}, headers=owner["headers"])
    assert resp.status_code == 400
    assert "Completion date is required" in resp.json()["message"]

    resp = await async_client.put(
        url, json={"is_completed": True, "completion_date": ""}, headers=owner["headers"]
    )
    assert resp.status_code == 400

    resp = await async_client.get(url, headers=owner["headers"])
    assert resp.json()["maintenance"]["is_completed"] is False


@pytest.mark.anyio
async def test_complete_using_stored_completion_date(async_client, owner):
    asset = await create_asset(async_client, owner["headers"], "Car")
    m = await create_maintenance(async_client, owner["headers"], asset["id"], completion_date="2025-03-01")
    url = f"/api/maintenances/asset/{asset['id']}/{m['id']}"

    resp = await async_client.put(url, json={"is_completed": True}, headers=owner["headers"])
    assert resp.status_code == 200, resp.text
    assert resp.json()["is_completed"] is True
    assert resp.json()["completion_date"] == "2025-03-01"


@pytest.mark.anyio
async def test_cannot_clear_date_of_completed_record(async_client, owner):
    asset = await create_asset(async_client, owner["headers"], "Car")
    m = await create_maintenance(
        async_client, owner["headers"], asset["id"], is_completed=True, completion_date="2025-03-01"
    )
    url = f"/api/maintenances/asset/{asset['id']}/{m['id']}"

    resp = await async_client.put(url, json={"completion_date": None}, headers=owner["headers"])
    assert resp.status_code == 400

    # Reopening and clearing together is fine
    resp = await async_client.put(
        url, json={"completion_date": None, "is_completed": False}, headers=owner["headers"]
    )
    assert resp.status_code == 200
    assert resp.json()["completion_date"] is None
    assert resp.json()["is_completed"] is False


@pytest.mark.anyio
async def test_no_ordering_enforced_between_dates(async_client, owner):
    asset = await create_asset(async_client, owner["headers"], "Car")
    m = await create_maintenance(
        async_client,
        owner["headers"],
        asset["id"],
        is_completed=True,
        completion_date="2025-06-01",
        next_due_date="2020-01-01",
    )
    assert m["next_due_date"] == "2020-01-01"


@pytest.mark.anyio
async def test_update_missing_maintenance(async_client, owner):
    asset = await create_asset(async_client, owner["headers"], "Car")
    resp = await async_client.put(
        f"/api/maintenances/asset/{asset['id']}/999999",
        json={"is_completed": True},
        headers=owner["headers"],
    )
    assert resp.status_code == 404


@pytest.mark.anyio
async def test_delete_maintenance(async_client, owner):
    asset = await create_asset(async_client, owner["headers"], "Car")
    m = await create_maintenance(async_client, owner["headers"], asset["id"])
    url = f"/api/maintenances/asset/{asset['id']}/{m['id']}"

    resp = await async_client.delete(url, headers=owner["headers"])
    assert resp.status_code == 204

    assert (await async_client.get(url, headers=owner["headers"])).status_code == 404
    assert (await async_client.delete(url, headers=owner["headers"])).status_code == 404


@pytest.mark.anyio
@pytest.mark.parametrize("blank", ["", "   "])
async def test_blank_notes_clear_on_update(async_client, owner, blank):
    asset = await create_asset(async_client, owner["headers"], "Car")
    m = await create_maintenance(async_client, owner["headers"], asset["id"], notes="Check tyres")
    url = f"/api/maintenances/asset/{asset['id']}/{m['id']}"

    resp = await async_client.put(url, json={"notes": blank}, headers=owner["headers"])
    assert resp.status_code == 200, resp.text
    assert resp.json()["notes"] is None

    resp = await async_client.get(url, headers=owner["headers"])
    assert resp.json()["maintenance"]["notes"] is None
