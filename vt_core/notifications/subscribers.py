# vt_core/notifications/subscribers.py
from __future__ import annotations

from typing import Any, Dict

from vt_core.common.events import subscribe
from vt_core.notifications.services import NotificationService
from vt_core.reminders.events import REMINDER_FIRED


@subscribe(REMINDER_FIRED)
def on_reminder_fired(payload: Dict[str, Any]) -> None:
    NotificationService.record_reminder(payload)
