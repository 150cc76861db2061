import pytest
from httpx import AsyncClient

from .factories import build_shift_create, build_staff_create


@pytest.mark.anyio("asyncio")
async def test_shift_api_crud(api_client: AsyncClient) -> None:
    payload = build_shift_create().model_dump(mode="json")

    create_response = await api_client.post("/api/shifts/", json=payload)
    assert create_response.status_code == 201
    created = create_response.json()
    assert created["ward"] == payload["ward"]
    assert created["status"] == "open"
    shift_id = created["id"]

    list_response = await api_client.get("/api/shifts/")
    assert list_response.status_code == 200
    shifts = list_response.json()
    assert len(shifts) == 1
    assert shifts[0]["id"] == shift_id

    update_response = await api_client.put(
        f"/api/shifts/{shift_id}",
        json={"ward": "Willow", "end_time": "20:00"},
    )
    assert update_response.status_code == 200
    updated = update_response.json()
    assert updated["ward"] == "Willow"
    assert updated["end_time"] == "20:00"

    delete_response = await api_client.delete(f"/api/shifts/{shift_id}")
    assert delete_response.status_code == 204

    list_after_delete = await api_client.get("/api/shifts/")
    assert list_after_delete.status_code == 200
    assert list_after_delete.json() == []


@pytest.mark.anyio("asyncio")
async def test_shift_api_validation(api_client: AsyncClient) -> None:
    bad_time = build_shift_create().model_dump(mode="json") | {"start_time": "25:00"}
    response = await api_client.post("/api/shifts/", json=bad_time)
    assert response.status_code == 422

    created = await api_client.post("/api/shifts/", json=build_shift_create().model_dump(mode="json"))
    shift_id = created.json()["id"]
    overfilled = await api_client.put(f"/api/shifts/{shift_id}", json={"filled_count": 3})
    assert overfilled.status_code == 422

    missing = await api_client.get("/api/shifts/999")
    assert missing.status_code == 404


@pytest.mark.anyio("asyncio")
async def test_shift_api_status_filter(api_client: AsyncClient) -> None:
    await api_client.post("/api/shifts/", json=build_shift_create().model_dump(mode="json"))
    await api_client.post(
        "/api/shifts/",
        json=build_shift_create(filled_count=1, status="filled").model_dump(mode="json"),
    )

    response = await api_client.get("/api/shifts/", params={"status": "filled"})

    assert response.status_code == 200
    assert [shift["status"] for shift in response.json()] == ["filled"]


@pytest.mark.anyio("asyncio")
async def test_staff_api_crud(api_client: AsyncClient) -> None:
    payload = build_staff_create(contracted_hours_per_week=30).model_dump(mode="json")

    create_response = await api_client.post("/api/staff/", json=payload)
    assert create_response.status_code == 201
    staff_id = create_response.json()["id"]
    assert create_response.json()["contracted_hours_per_week"] == 30

    update_response = await api_client.put(f"/api/staff/{staff_id}", json={"wellbeing_score": 25})
    assert update_response.status_code == 200
    assert update_response.json()["wellbeing_score"] == 25

    invalid = await api_client.put(f"/api/staff/{staff_id}", json={"wellbeing_score": 150})
    assert invalid.status_code == 422

    delete_response = await api_client.delete(f"/api/staff/{staff_id}")
    assert delete_response.status_code == 204
    assert (await api_client.get(f"/api/staff/{staff_id}")).status_code == 404
