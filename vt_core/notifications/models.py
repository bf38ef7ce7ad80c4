# vt_core/notifications/models.py
from __future__ import annotations

from datetime import datetime

from django.db import models

from vt_core.common.models import AccountScopedModel


class Notification(AccountScopedModel):
    """
    In-app inbox entry written when a reminder fires.
    Keep links loose (UUID fields): the inbox outlives deleted reminders and doses.
    """
    subject_id = models.UUIDField(null=True, blank=True, db_index=True)
    reminder_id = models.UUIDField(null=True, blank=True, unique=True)
    dose_id = models.UUIDField(null=True, blank=True)

    title = models.CharField(max_length=255)
    body = models.TextField(blank=True, default="")

    is_read = models.BooleanField(default=False, db_index=True)
    read_at = models.DateTimeField(null=True, blank=True)

    meta = models.JSONField(default=dict, blank=True)

    class Meta:
        db_table = "notifications_notification"
        indexes = [
            models.Index(fields=["account_id", "is_read"]),
        ]

    def mark_read(self, at: datetime) -> bool:
        if self.is_read:
            return False
        self.is_read = True
        self.read_at = at
        return True
