from datetime import date
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient

from app.api.deps import get_calendar_service, get_clinic_doctor_ids
from app.core.redis import redis_client
from app.main import app, lifespan
from app.schemas.availability import WeeklyScheduleEntry
from app.services.calendar_service import CalendarService

from factories import FakeAppointmentStore, FakeScheduleStore, appointment, day_off, leave


@pytest.fixture
def clinic():
    first, second = uuid4(), uuid4()
    store = FakeScheduleStore(
        schedules=[day_off(first, 0), day_off(second, 6)],
        leaves=[leave(first, date(2025, 6, 9))],
    )
    appointments = FakeAppointmentStore([
        appointment(second, date(2025, 6, 10), "11:00", patient_name="Ayesha Khan"),
        appointment(second, date(2025, 6, 10), "09:15", patient_name="Bilal Ahmed"),
    ])
    return {"tenant_id": uuid4(), "doctors": [first, second], "store": store, "appointments": appointments}


@pytest.fixture
def client(clinic):
    service = CalendarService(clinic["store"], clinic["appointments"])
    app.dependency_overrides[get_calendar_service] = lambda: service
    app.dependency_overrides[get_clinic_doctor_ids] = lambda: clinic["doctors"]
    yield AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
    app.dependency_overrides.clear()


@pytest.mark.asyncio
async def test_doctor_availability(client, clinic):
    doctor_id = clinic["doctors"][0]
    async with client as ac:
        res = await ac.get(
            f"/api/v1/availability/doctors/{doctor_id}",
            params={"start_date": "2025-06-08", "end_date": "2025-06-14"},
        )

    assert res.status_code == 200
    body = res.json()
    assert body["marks"] == [
        {"date": "2025-06-08", "kind": "day_off", "reason": "Sunday Off"},
        {"date": "2025-06-09", "kind": "leave", "reason": "On Leave"},
    ]
    assert body["warnings"] == []


@pytest.mark.asyncio
async def test_clinic_availability(client, clinic):
    async with client as ac:
        res = await ac.get(
            f"/api/v1/availability/clinics/{clinic['tenant_id']}",
            params={"start_date": "2025-06-08", "end_date": "2025-06-14"},
        )

    assert res.status_code == 200
    assert res.json()["marks"] == [{"date": "2025-06-09", "kind": "leave", "reason": "On Leave"}]


@pytest.mark.asyncio
async def test_clinic_classification(client, clinic):
    async with client as ac:
        res = await ac.get(
            f"/api/v1/availability/clinics/{clinic['tenant_id']}/days",
            params={"start_date": "2025-06-08", "end_date": "2025-06-14"},
        )

    assert res.status_code == 200
    days = res.json()["days"]
    assert len(days) == 7
    assert [d["classification"] for d in days].count("available") == 6


@pytest.mark.asyncio
async def test_inverted_range_is_bad_request(client, clinic):
    doctor_id = clinic["doctors"][0]
    async with client as ac:
        res = await ac.get(
            f"/api/v1/availability/doctors/{doctor_id}",
            params={"start_date": "2025-06-14", "end_date": "2025-06-08"},
        )

    assert res.status_code == 400


@pytest.mark.asyncio
async def test_clinic_without_doctors_is_not_found(client, clinic):
    app.dependency_overrides[get_clinic_doctor_ids] = lambda: []
    async with client as ac:
        res = await ac.get(
            f"/api/v1/availability/clinics/{clinic['tenant_id']}",
            params={"start_date": "2025-06-08", "end_date": "2025-06-14"},
        )

    assert res.status_code == 404


@pytest.mark.asyncio
async def test_malformed_schedule_is_server_error(client, clinic):
    doctor_id = clinic["doctors"][0]
    clinic["store"].schedules.append(WeeklyScheduleEntry(doctor_id=doctor_id, day_of_week=9, is_available=False))
    async with client as ac:
        res = await ac.get(
            f"/api/v1/availability/doctors/{doctor_id}",
            params={"start_date": "2025-06-08", "end_date": "2025-06-14"},
        )

    assert res.status_code == 500
    assert "day_of_week" in res.json()["detail"]


@pytest.mark.asyncio
async def test_clinic_calendar_week_view(client, clinic):
    async with client as ac:
        res = await ac.get(
            f"/api/v1/calendar/clinics/{clinic['tenant_id']}",
            params={"date": "2025-06-10", "view": "week"},
        )

    assert res.status_code == 200
    body = res.json()
    assert body["start_date"] == "2025-06-08"
    assert body["end_date"] == "2025-06-14"
    assert body["badges"] == [{"date": "2025-06-09", "kind": "leave"}]
    assert [a["patient_name"] for a in body["selected"]["appointments"]] == ["Bilal Ahmed", "Ayesha Khan"]
    assert body["selected"]["is_selectable"] is True


@pytest.mark.asyncio
async def test_doctor_calendar_month_view(client, clinic):
    doctor_id = clinic["doctors"][0]
    async with client as ac:
        res = await ac.get(
            f"/api/v1/calendar/doctors/{doctor_id}",
            params={"date": "2025-06-15", "view": "month"},
        )

    assert res.status_code == 200
    body = res.json()
    assert body["start_date"] == "2025-06-01"
    assert body["end_date"] == "2025-06-30"
    sundays = [b["date"] for b in body["badges"] if b["kind"] == "day_off"]
    assert sundays == ["2025-06-01", "2025-06-08", "2025-06-15", "2025-06-22", "2025-06-29"]
    assert body["selected"]["unavailable_reason"] == "Sunday Off"
    assert body["selected"]["is_selectable"] is False


@pytest.mark.asyncio
async def test_unknown_view_is_rejected(client, clinic):
    doctor_id = clinic["doctors"][0]
    async with client as ac:
        res = await ac.get(f"/api/v1/calendar/doctors/{doctor_id}", params={"date": "2025-06-15", "view": "year"})

    assert res.status_code == 422


@pytest.mark.asyncio
async def test_shutdown_closes_redis(monkeypatch):
    connection = MagicMock()
    connection.aclose = AsyncMock()
    monkeypatch.setattr(redis_client, "redis", connection)

    async with lifespan(app):
        connection.aclose.assert_not_awaited()

    connection.aclose.assert_awaited_once()
