from __future__ import annotations

from datetime import date

import pytest
from httpx import AsyncClient

from biocal.dependencies import get_today
from biocal.main import app
from biocal.schemas.profile import UserProfile
from biocal.services.storage_service import StorageService


@pytest.fixture
async def saved_profile(storage: StorageService, us_profile: UserProfile) -> UserProfile:
    await storage.save_profile(us_profile)
    return us_profile


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "path",
    [
        "/api/v1/calendar",
        "/api/v1/calendar/today",
        "/api/v1/calendar/week",
        "/api/v1/calendar/filter/Leaf",
        "/api/v1/calendar/next/Fruit",
    ],
)
async def test_calendar_requires_a_profile(client: AsyncClient, path: str) -> None:
    response = await client.get(path)
    assert response.status_code == 404
    assert "onboarding" in response.json()["detail"]


@pytest.mark.asyncio
async def test_default_calendar_starts_today(client: AsyncClient, saved_profile: UserProfile) -> None:
    response = await client.get("/api/v1/calendar")

    assert response.status_code == 200
    body = response.json()
    assert body["start"] == "2024-01-01"
    assert len(body["days"]) == 30
    first = body["days"][0]
    assert first["date"] == "2024-01-01"
    assert first["day_type"] == "Root"
    assert first["moon_phase"] == "Waning Gibbous"
    assert first["seasonal_mode"] == "Dormancy"
    assert first["best_crops"] == ["Garlic", "Turnips", "Radishes", "Potatoes"]
    assert first["permaculture_tip"]["title"] == "Chop and Drop"
    assert first["educational_content"] is None


@pytest.mark.asyncio
async def test_calendar_range_and_educational_flag(client: AsyncClient, saved_profile: UserProfile) -> None:
    response = await client.get(
        "/api/v1/calendar",
        params={"start": "2024-06-10", "days": 3, "educational": "true"},
    )

    days = response.json()["days"]
    assert [day["date"] for day in days] == ["2024-06-10", "2024-06-11", "2024-06-12"]
    assert all(day["educational_content"]["science_section"]["evidence_level"] == "Traditional" for day in days)


@pytest.mark.asyncio
async def test_calendar_rejects_bad_day_counts(client: AsyncClient, saved_profile: UserProfile) -> None:
    assert (await client.get("/api/v1/calendar", params={"days": 0})).status_code == 422
    too_many = await client.get("/api/v1/calendar", params={"days": 400})
    assert too_many.status_code == 400
    assert "366" in too_many.json()["detail"]


@pytest.mark.asyncio
async def test_today_and_week(client: AsyncClient, saved_profile: UserProfile) -> None:
    today = await client.get("/api/v1/calendar/today")
    assert today.status_code == 200
    assert today.json()["micro_task"] == "Record one observation in journal"

    week = await client.get("/api/v1/calendar/week")
    assert [day["day_type"] for day in week.json()["days"][:5]] == ["Root", "Flower", "Leaf", "Fruit", "Root"]
    assert len(week.json()["days"]) == 7


@pytest.mark.asyncio
async def test_filter_by_day_type(client: AsyncClient, saved_profile: UserProfile) -> None:
    response = await client.get("/api/v1/calendar/filter/Leaf", params={"days": 12})
    assert [day["date"] for day in response.json()["days"]] == ["2024-01-03", "2024-01-07", "2024-01-11"]


@pytest.mark.asyncio
async def test_unknown_day_type_is_rejected(client: AsyncClient, saved_profile: UserProfile) -> None:
    response = await client.get("/api/v1/calendar/filter/Stem")
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_next_day_type(client: AsyncClient, saved_profile: UserProfile) -> None:
    response = await client.get("/api/v1/calendar/next/Fruit")
    assert response.status_code == 200
    assert response.json()["date"] == "2024-01-04"

    from_start = await client.get("/api/v1/calendar/next/Flower", params={"start": "2024-01-03"})
    assert from_start.json()["date"] == "2024-01-06"


@pytest.mark.asyncio
async def test_preview_does_not_need_a_saved_profile(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/calendar/preview",
        json={
            "profile": {"country": "AU", "latitude": -33.9},
            "start": "2024-01-15",
            "days": 2,
        },
    )

    assert response.status_code == 200
    days = response.json()["days"]
    assert len(days) == 2
    assert days[0]["seasonal_mode"] == "Succession Planting"


@pytest.mark.asyncio
async def test_preview_rejects_invalid_profile(client: AsyncClient) -> None:
    response = await client.post("/api/v1/calendar/preview", json={"profile": {"latitude": 10}})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_guide_lists_reference_tables(client: AsyncClient) -> None:
    response = await client.get("/api/v1/calendar/guide")

    assert response.status_code == 200
    body = response.json()
    assert [entry["day_type"] for entry in body["day_types"]] == ["Root", "Flower", "Leaf", "Fruit"]
    assert len(body["moon_phases"]) == 8
    dormancy = next(entry for entry in body["seasonal_modes"] if entry["mode"] == "Dormancy")
    assert dormancy["good_for"] == ["pruning"]


@pytest.mark.asyncio
async def test_range_past_last_representable_date_is_rejected(
    client: AsyncClient,
    saved_profile: UserProfile,
) -> None:
    response = await client.get("/api/v1/calendar", params={"start": "9999-12-30", "days": 5})
    assert response.status_code == 400
    assert "runs past" in response.json()["detail"]

    fits = await client.get("/api/v1/calendar", params={"start": "9999-12-30", "days": 2})
    assert fits.status_code == 200
    assert [day["date"] for day in fits.json()["days"]] == ["9999-12-30", "9999-12-31"]

    preview = await client.post(
        "/api/v1/calendar/preview",
        json={"profile": {"country": "US"}, "start": "9999-12-31", "days": 3},
    )
    assert preview.status_code == 400


@pytest.mark.asyncio
async def test_week_and_today_at_the_end_of_the_calendar(
    client: AsyncClient,
    saved_profile: UserProfile,
) -> None:
    app.dependency_overrides[get_today] = lambda: date(9999, 12, 28)

    week = await client.get("/api/v1/calendar/week")
    assert week.status_code == 400

    today = await client.get("/api/v1/calendar/today")
    assert today.status_code == 200
    assert today.json()["date"] == "9999-12-28"


@pytest.mark.asyncio
async def test_next_day_type_search_stops_at_last_date(
    client: AsyncClient,
    saved_profile: UserProfile,
) -> None:
    # 9999-12-31 is a Flower day; a Root day would lie beyond it.
    found = await client.get("/api/v1/calendar/next/Flower", params={"start": "9999-12-31"})
    assert found.status_code == 200
    assert found.json()["date"] == "9999-12-31"

    beyond = await client.get("/api/v1/calendar/next/Root", params={"start": "9999-12-31"})
    assert beyond.status_code == 400
