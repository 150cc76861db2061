from typing import Any

import pytest
from httpx import AsyncClient

from .factories import build_shift_create, build_staff_create
from .utils import day


async def _create(api_client: AsyncClient, path: str, payload: Any) -> dict[str, Any]:
    response = await api_client.post(path, json=payload.model_dump(mode="json"))
    assert response.status_code == 201, response.text
    return response.json()


async def _assign(api_client: AsyncClient, shift_id: int, staff_id: int, **extra: Any):
    return await api_client.post(
        f"/api/assignments/shifts/{shift_id}", json={"staff_id": staff_id, **extra}
    )


@pytest.mark.anyio("asyncio")
async def test_health(api_client: AsyncClient) -> None:
    response = await api_client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.anyio("asyncio")
async def test_recommendations_rank_staff(api_client: AsyncClient) -> None:
    shift = await _create(api_client, "/api/shifts/", build_shift_create())
    agency = await _create(
        api_client,
        "/api/staff/",
        build_staff_create(name="Femi", ward="Redwood", staff_type="agency", preferred_shift="night"),
    )
    permanent = await _create(api_client, "/api/staff/", build_staff_create(name="Amara"))
    untrained = await _create(
        api_client, "/api/staff/", build_staff_create(name="Eilidh", mandatory_training_complete=False)
    )
    await _create(api_client, "/api/staff/", build_staff_create(name="Elsewhere", organisation_id=2))

    response = await api_client.get(f"/api/assignments/shifts/{shift['id']}/recommendations")

    assert response.status_code == 200
    body = response.json()
    assert body["shift"]["id"] == shift["id"]
    assert [c["staff_id"] for c in body["all_ranked"]] == [permanent["id"], untrained["id"], agency["id"]]
    assert [c["staff_id"] for c in body["top_recommendations"]] == [permanent["id"], agency["id"]]
    top = body["top_recommendations"][0]
    assert top["score"] == 125
    assert top["reasons"][0] == "Staff type: Permanent +40"
    assert len(top["verdicts"]) == 6
    blocked = body["all_ranked"][1]
    assert blocked["eligible"] is False
    assert blocked["violations"]


@pytest.mark.anyio("asyncio")
async def test_recommendations_limit_and_missing_shift(api_client: AsyncClient) -> None:
    shift = await _create(api_client, "/api/shifts/", build_shift_create())
    for index in range(3):
        await _create(api_client, "/api/staff/", build_staff_create(name=f"Nurse {index}"))

    limited = await api_client.get(
        f"/api/assignments/shifts/{shift['id']}/recommendations", params={"limit": 2}
    )
    missing = await api_client.get("/api/assignments/shifts/999/recommendations")

    assert len(limited.json()["top_recommendations"]) == 2
    assert len(limited.json()["all_ranked"]) == 3
    assert missing.status_code == 404


@pytest.mark.anyio("asyncio")
async def test_assign_fills_shift_and_blocks_repeat(api_client: AsyncClient) -> None:
    shift = await _create(api_client, "/api/shifts/", build_shift_create())
    first = await _create(api_client, "/api/staff/", build_staff_create(name="Amara"))
    second = await _create(api_client, "/api/staff/", build_staff_create(name="Ben"))

    response = await _assign(api_client, shift["id"], first["id"])

    assert response.status_code == 201, response.text
    body = response.json()
    assert body["assignment"]["staff_id"] == first["id"]
    assert body["evaluation"]["eligible"] is True
    refreshed = (await api_client.get(f"/api/shifts/{shift['id']}")).json()
    assert refreshed["filled_count"] == 1
    assert refreshed["status"] == "filled"

    assert (await _assign(api_client, shift["id"], first["id"])).status_code == 409
    assert (await _assign(api_client, shift["id"], second["id"])).status_code == 409


@pytest.mark.anyio("asyncio")
async def test_assign_rejects_duplicate_on_multi_seat_shift(api_client: AsyncClient) -> None:
    shift = await _create(api_client, "/api/shifts/", build_shift_create(required_count=2))
    member = await _create(api_client, "/api/staff/", build_staff_create())

    assert (await _assign(api_client, shift["id"], member["id"])).status_code == 201
    duplicate = await _assign(api_client, shift["id"], member["id"])

    assert duplicate.status_code == 409
    assert "already assigned" in duplicate.json()["detail"]


@pytest.mark.anyio("asyncio")
async def test_assign_rejects_ineligible_staff(api_client: AsyncClient) -> None:
    night = await _create(
        api_client,
        "/api/shifts/",
        build_shift_create(shift_date=day(-1), start_time="19:30", end_time="08:00"),
    )
    day_shift = await _create(api_client, "/api/shifts/", build_shift_create())
    member = await _create(api_client, "/api/staff/", build_staff_create())
    assert (await _assign(api_client, night["id"], member["id"])).status_code == 201

    response = await _assign(api_client, day_shift["id"], member["id"])

    assert response.status_code == 409
    detail = response.json()["detail"]
    assert detail["message"] == "Staff member is not eligible for this shift"
    assert any("Insufficient rest" in violation for violation in detail["violations"])


@pytest.mark.anyio("asyncio")
async def test_manager_override_allows_untrained_staff(api_client: AsyncClient) -> None:
    shift = await _create(api_client, "/api/shifts/", build_shift_create())
    member = await _create(
        api_client, "/api/staff/", build_staff_create(mandatory_training_complete=False)
    )

    blocked = await _assign(api_client, shift["id"], member["id"])
    allowed = await _assign(api_client, shift["id"], member["id"], manager_override=True)

    assert blocked.status_code == 409
    assert allowed.status_code == 201
    assert allowed.json()["assignment"]["manager_override"] is True
    assert allowed.json()["evaluation"]["warnings"]


@pytest.mark.anyio("asyncio")
async def test_assign_rejects_other_organisation(api_client: AsyncClient) -> None:
    shift = await _create(api_client, "/api/shifts/", build_shift_create())
    outsider = await _create(api_client, "/api/staff/", build_staff_create(organisation_id=2))

    response = await _assign(api_client, shift["id"], outsider["id"])

    assert response.status_code == 409
    assert (await _assign(api_client, shift["id"], 999)).status_code == 404
