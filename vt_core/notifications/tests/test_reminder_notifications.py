import uuid

import pytest

from vt_core.common.events import subscribe, unsubscribe
from vt_core.common.exceptions import NotFound
from vt_core.doses.models import DoseRecord
from vt_core.notifications.models import Notification
from vt_core.notifications.services import NotificationService
from vt_core.reminders.events import REMINDER_FIRED
from vt_core.reminders.scheduler import ReminderScheduler
from vt_core.reminders.services import ReminderService
from vt_core.tests.helpers import scoped

pytestmark = pytest.mark.django_db


@pytest.fixture
def bus_scheduler(store):
    # default callback: publishes reminder.fired on the event bus
    return ReminderScheduler(store=store)


def _fire_one(store, scheduler, subject, clock, message=None):
    dose = DoseRecord.objects.get(subject=subject, dose_name="BCG")
    reminder = ReminderService.schedule_reminder(
        store=store,
        scheduler=scheduler,
        dose_id=dose.id,
        fire_at=clock.now(),
        message=message,
    )
    scheduler.fire_due()
    return reminder


def test_fired_reminder_lands_in_inbox(store, bus_scheduler, subject, clock):
    reminder = _fire_one(store, bus_scheduler, subject, clock)

    notif = Notification.objects.get(reminder_id=reminder.id)
    assert notif.title == "Vaccination Reminder"
    assert notif.body == "Reminder: Asha Rao's BCG vaccine is overdue."
    assert notif.account_id == subject.account_id
    assert notif.subject_id == subject.id
    assert notif.dose_id == reminder.dose_id
    assert notif.is_read is False


def test_inbox_entry_is_idempotent_per_reminder(store, bus_scheduler, subject, clock):
    reminder = _fire_one(store, bus_scheduler, subject, clock)
    payload = {
        "reminder_id": str(reminder.id),
        "dose_id": str(reminder.dose_id),
        "subject_id": str(subject.id),
        "account_id": str(subject.account_id),
        "message": "again",
        "fire_at": reminder.fire_at.isoformat(),
        "consumed_at": None,
    }

    NotificationService.record_reminder(payload)

    assert Notification.objects.filter(reminder_id=reminder.id).count() == 1


def test_inbox_survives_reminder_deletion(store, bus_scheduler, subject, clock):
    reminder = _fire_one(store, bus_scheduler, subject, clock)

    ReminderService.cancel_reminder(store=store, scheduler=bus_scheduler, reminder_id=reminder.id)

    assert Notification.objects.filter(reminder_id=reminder.id).exists()


def test_mark_read(store, bus_scheduler, subject, clock, account_id, other_account_id):
    reminder = _fire_one(store, bus_scheduler, subject, clock)
    notif = Notification.objects.get(reminder_id=reminder.id)

    with pytest.raises(NotFound):
        NotificationService.mark_read(account_id=other_account_id, notification_id=notif.id, at=clock.now())

    read = NotificationService.mark_read(account_id=account_id, notification_id=notif.id, at=clock.now())
    assert read.is_read is True
    assert read.read_at == clock.now()

    clock.advance(hours=1)
    again = NotificationService.mark_read(account_id=account_id, notification_id=notif.id, at=clock.now())
    assert again.read_at == read.read_at


def test_inbox_api(api_client, store, bus_scheduler, subject, clock, account_id):
    reminder = _fire_one(store, bus_scheduler, subject, clock)

    r = api_client.get("/api/v1/notifications/", **scoped(account_id))
    assert r.status_code == 200, r.data
    assert r.data["count"] == 1
    notif_id = r.data["results"][0]["id"]
    assert r.data["results"][0]["reminder_id"] == str(reminder.id)

    r = api_client.post(f"/api/v1/notifications/{notif_id}/mark-read/", **scoped(account_id))
    assert r.status_code == 200, r.data
    assert r.data["is_read"] is True

    r = api_client.get("/api/v1/notifications/?is_read=false", **scoped(account_id))
    assert r.data["count"] == 0

    r = api_client.post(f"/api/v1/notifications/{uuid.uuid4()}/mark-read/", **scoped(account_id))
    assert r.status_code == 404


def test_reminder_fired_payload(store, bus_scheduler, subject, clock):
    seen = []
    handler = subscribe(REMINDER_FIRED)(seen.append)
    try:
        reminder = _fire_one(store, bus_scheduler, subject, clock, message="BCG today.")
    finally:
        unsubscribe(REMINDER_FIRED, handler)

    assert seen == [
        {
            "reminder_id": str(reminder.id),
            "dose_id": str(reminder.dose_id),
            "subject_id": str(subject.id),
            "account_id": str(subject.account_id),
            "message": "BCG today.",
            "fire_at": clock.now().isoformat(),
            "consumed_at": clock.now().isoformat(),
        }
    ]
