# vt_core/reminders/models.py
from __future__ import annotations

from datetime import datetime

from django.db import models

from vt_core.common.models import UUIDModel


class Reminder(UUIDModel):
    """
    One-shot caregiver notification tied to a dose.
    References the dose by id only (no reverse accessor); deleting the dose
    or the subject deletes the reminder.
    Several unconsumed reminders may exist for the same dose.
    """
    dose = models.ForeignKey(
        "doses.DoseRecord",
        on_delete=models.CASCADE,
        related_name="+",
    )
    subject = models.ForeignKey(
        "subjects.Subject",
        on_delete=models.CASCADE,
        related_name="+",
    )

    fire_at = models.DateTimeField(db_index=True)
    message = models.TextField()

    consumed = models.BooleanField(default=False, db_index=True)
    consumed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "reminders_reminder"
        indexes = [
            models.Index(fields=["consumed", "fire_at"]),
            models.Index(fields=["subject", "fire_at"]),
        ]

    def mark_consumed(self, at: datetime) -> bool:
        if self.consumed:
            return False
        self.consumed = True
        self.consumed_at = at
        return True

    def __str__(self) -> str:
        return f"Reminder {self.id} at {self.fire_at.isoformat()}"
