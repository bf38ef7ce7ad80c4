# vt_core/notifications/services.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict
from uuid import UUID

from vt_core.notifications.models import Notification
from vt_core.notifications.selectors import get_notification

REMINDER_TITLE = "Vaccination Reminder"


class NotificationService:
    @staticmethod
    def record_reminder(payload: Dict[str, Any]) -> Notification:
        """
        Idempotent per reminder: a reminder that somehow fires twice still
        produces one inbox entry.
        """
        notif, _ = Notification.objects.get_or_create(
            reminder_id=payload["reminder_id"],
            defaults={
                "account_id": payload["account_id"],
                "subject_id": payload["subject_id"],
                "dose_id": payload["dose_id"],
                "title": REMINDER_TITLE,
                "body": payload["message"],
                "meta": {"fire_at": payload["fire_at"], "consumed_at": payload["consumed_at"]},
            },
        )
        return notif

    @staticmethod
    def mark_read(*, account_id: UUID, notification_id: UUID, at: datetime) -> Notification:
        notif = get_notification(account_id=account_id, notification_id=notification_id)
        if notif.mark_read(at):
            notif.save(update_fields=["is_read", "read_at", "updated_at"])
        return notif
