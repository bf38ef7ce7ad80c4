# vt_core/reminders/events.py
from __future__ import annotations

from typing import Any, Dict

from vt_core.common.events import publish
from vt_core.reminders.models import Reminder

REMINDER_FIRED = "reminder.fired"


def reminder_payload(reminder: Reminder) -> Dict[str, Any]:
    return {
        "reminder_id": str(reminder.id),
        "dose_id": str(reminder.dose_id),
        "subject_id": str(reminder.subject_id),
        "account_id": str(reminder.subject.account_id),
        "message": reminder.message,
        "fire_at": reminder.fire_at.isoformat(),
        "consumed_at": reminder.consumed_at.isoformat() if reminder.consumed_at else None,
    }


def publish_reminder_fired(reminder: Reminder) -> None:
    """
    Default scheduler notification callback.

    Runs inside the firing transaction: a subscriber that raises rolls back
    the consumed flag together with anything the other subscribers wrote,
    so the reminder stays pending.
    """
    publish(REMINDER_FIRED, reminder_payload(reminder))
