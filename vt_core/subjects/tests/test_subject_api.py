import uuid
from datetime import date

import pytest
from django.apps import apps

from vt_core.reminders.models import Reminder
from vt_core.reminders.scheduler import ReminderScheduler
from vt_core.tests.helpers import scoped

pytestmark = pytest.mark.django_db


def _create(api_client, account_id, **overrides):
    payload = {"full_name": "Kiran Das", "birthdate": "2025-01-01", "gender": "male"}
    payload.update(overrides)
    r = api_client.post("/api/v1/subjects/", payload, format="json", **scoped(account_id))
    assert r.status_code == 201, r.data
    return r.data


def test_create_and_retrieve_subject(api_client, app_store, account_id):
    created = _create(api_client, account_id)
    assert created["age"] == 0
    assert created["account_id"] == str(account_id)

    r = api_client.get(f"/api/v1/subjects/{created['id']}/", **scoped(account_id))
    assert r.status_code == 200, r.data
    assert r.data["full_name"] == "Kiran Das"
    assert r.data["birthdate"] == "2025-01-01"


def test_list_is_per_account(api_client, app_store, account_id, other_account_id):
    _create(api_client, account_id)
    _create(api_client, other_account_id, full_name="Someone Else")

    r = api_client.get("/api/v1/subjects/", **scoped(account_id))
    assert r.status_code == 200
    assert [s["full_name"] for s in r.data] == ["Kiran Das"]


def test_future_birthdate_is_400(api_client, app_store, account_id):
    r = api_client.post(
        "/api/v1/subjects/",
        {"full_name": "Too Early", "birthdate": "2025-07-01"},
        format="json",
        **scoped(account_id),
    )
    assert r.status_code == 400
    assert r.data["error"]["code"] == "validation_error"


def test_schedule_listing_sweeps_first(api_client, app_store, clock, account_id):
    created = _create(api_client, account_id)

    r = api_client.get(f"/api/v1/subjects/{created['id']}/doses/", **scoped(account_id))
    assert r.status_code == 200, r.data
    assert r.data["count"] == 33
    assert r.data["results"][0]["dose_name"] == "BCG"

    clock.set(clock.now().replace(year=2025, month=10, day=2))
    r = api_client.get(f"/api/v1/subjects/{created['id']}/doses/?status=MISSED&page_size=50", **scoped(account_id))
    assert r.data["count"] == 23


def test_bad_dose_filter_is_400(api_client, app_store, account_id):
    created = _create(api_client, account_id)
    r = api_client.get(f"/api/v1/subjects/{created['id']}/doses/?due_before=yesterday", **scoped(account_id))
    assert r.status_code == 400
    assert "due_before" in r.data["error"]["message"]


def test_complete_dose_and_compliance(api_client, app_store, account_id):
    created = _create(api_client, account_id)
    doses = api_client.get(
        f"/api/v1/subjects/{created['id']}/doses/?status=MISSED&page_size=50",
        **scoped(account_id),
    ).data["results"]
    assert len(doses) == 21

    for d in doses:
        r = api_client.post(f"/api/v1/doses/{d['id']}/complete/", {}, format="json", **scoped(account_id))
        assert r.status_code == 200, r.data
        assert r.data["status"] == "COMPLETED"

    r = api_client.get(f"/api/v1/subjects/{created['id']}/compliance/", **scoped(account_id))
    assert r.status_code == 200, r.data
    assert r.data["score"] == 64
    assert r.data["raw_score"] == 64
    assert r.data["total"] == 33
    assert r.data["missed"] == 0
    assert r.data["subject_id"] == created["id"]


def test_add_manual_dose(api_client, app_store, account_id):
    created = _create(api_client, account_id)

    r = api_client.post(
        "/api/v1/doses/",
        {"subject_id": created["id"], "dose_name": "Influenza 1", "due_date": "2025-07-01", "disease": "Influenza"},
        format="json",
        **scoped(account_id),
    )
    assert r.status_code == 201, r.data
    assert r.data["is_manual"] is True
    assert r.data["status"] == "UPCOMING"

    r = api_client.get(f"/api/v1/doses/{r.data['id']}/", **scoped(account_id))
    assert r.status_code == 200
    assert r.data["sequence"] == 33


def test_account_sweep_endpoint(api_client, app_store, clock, account_id):
    _create(api_client, account_id)
    clock.set(clock.now().replace(year=2025, month=10, day=2))

    r = api_client.post("/api/v1/doses/sweep/", **scoped(account_id))
    assert r.status_code == 200
    assert r.data == {"promoted": 2}


def test_reminder_schedule_and_cancel(api_client, app_store, account_id):
    created = _create(api_client, account_id)
    dose = api_client.get(f"/api/v1/subjects/{created['id']}/doses/", **scoped(account_id)).data["results"][0]

    r = api_client.post(
        "/api/v1/reminders/",
        {"dose_id": dose["id"], "subject_id": created["id"], "fire_at": "2025-06-02T09:00:00Z"},
        format="json",
        **scoped(account_id),
    )
    assert r.status_code == 201, r.data
    reminder_id = r.data["id"]
    assert r.data["message"] == "Reminder: Kiran Das's BCG vaccine is overdue."
    assert r.data["consumed"] is False

    r = api_client.get(f"/api/v1/reminders/?dose={dose['id']}", **scoped(account_id))
    assert r.status_code == 200
    assert [x["id"] for x in r.data["results"]] == [reminder_id]

    r = api_client.delete(f"/api/v1/reminders/{reminder_id}/", **scoped(account_id))
    assert r.status_code == 204
    assert not Reminder.objects.filter(id=reminder_id).exists()

    r = api_client.delete(f"/api/v1/reminders/{reminder_id}/", **scoped(account_id))
    assert r.status_code == 404


def test_api_reminders_are_left_to_the_worker(api_client, app_store, monkeypatch, account_id):
    # The API process scheduler is never started, so nothing may pile up in it.
    idle = ReminderScheduler(store=app_store)
    monkeypatch.setattr(apps.get_app_config("reminders"), "scheduler", idle)

    created = _create(api_client, account_id)
    doses = api_client.get(f"/api/v1/subjects/{created['id']}/doses/", **scoped(account_id)).data["results"]

    for d in doses[:5]:
        r = api_client.post(
            "/api/v1/reminders/",
            {"dose_id": d["id"], "fire_at": "2025-05-01T09:00:00Z"},
            format="json",
            **scoped(account_id),
        )
        assert r.status_code == 201, r.data

    r = api_client.delete(f"/api/v1/reminders/{r.data['id']}/", **scoped(account_id))
    assert r.status_code == 204
    assert idle.pending() == 0
    assert idle._heap == []

    fired = []
    worker = ReminderScheduler(store=app_store, notify=fired.append)
    assert worker.load() == 4
    worker.fire_due()
    assert len(fired) == 4
    assert idle.pending() == 0


def test_delete_subject(api_client, app_store, account_id):
    created = _create(api_client, account_id)

    r = api_client.delete(f"/api/v1/subjects/{created['id']}/", **scoped(account_id))
    assert r.status_code == 204

    r = api_client.get(f"/api/v1/subjects/{created['id']}/", **scoped(account_id))
    assert r.status_code == 404


def test_missing_account_header_is_400(api_client):
    r = api_client.get("/api/v1/subjects/")
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "validation_error"


def test_schema_is_public(api_client):
    r = api_client.get("/api/schema/")
    assert r.status_code == 200


def test_subject_age_uses_store_clock(api_client, app_store, clock, account_id):
    created = _create(api_client, account_id, birthdate="2020-06-01")
    assert created["age"] == 5

    clock.set(clock.now().replace(year=2026, month=5, day=31))
    r = api_client.get(f"/api/v1/subjects/{created['id']}/", **scoped(account_id))
    assert r.data["age"] == 5
    assert date.fromisoformat(r.data["birthdate"]) == date(2020, 6, 1)
    assert uuid.UUID(r.data["id"])
