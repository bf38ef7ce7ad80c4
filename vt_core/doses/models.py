# vt_core/doses/models.py
from __future__ import annotations

from datetime import date

from django.db import models
from django.db.models import Q

from vt_core.common.models import UUIDModel


class DoseStatus(models.TextChoices):
    UPCOMING = "UPCOMING", "Upcoming"
    COMPLETED = "COMPLETED", "Completed"
    MISSED = "MISSED", "Missed"


class DoseRecord(UUIDModel):
    """
    One required dose for one subject.
    due_date is derived once from birthdate + template offset and never changes.
    """
    subject = models.ForeignKey("subjects.Subject", on_delete=models.CASCADE, related_name="doses")

    # template position; keeps same-day doses in schedule order
    sequence = models.PositiveIntegerField(default=0)

    dose_name = models.CharField(max_length=128)
    disease = models.CharField(max_length=128, blank=True, default="")

    due_date = models.DateField(db_index=True)

    status = models.CharField(
        max_length=16,
        choices=DoseStatus.choices,
        default=DoseStatus.UPCOMING,
        db_index=True,
    )
    completed_at = models.DateTimeField(null=True, blank=True)
    notes = models.TextField(blank=True, default="")

    is_manual = models.BooleanField(default=False)  # added by caregiver, not from the template

    class Meta:
        db_table = "doses_dose_record"
        indexes = [
            models.Index(fields=["subject", "status", "due_date"]),
            models.Index(fields=["status", "due_date"]),
        ]
        constraints = [
            models.CheckConstraint(
                condition=(
                    (Q(status=DoseStatus.COMPLETED) & Q(completed_at__isnull=False))
                    | (~Q(status=DoseStatus.COMPLETED) & Q(completed_at__isnull=True))
                ),
                name="ck_dose_completed_at_iff_completed",
            ),
        ]

    def overdue_days(self, today: date) -> int:
        """Whole days past due on `today` (0 when not yet due)."""
        return max(0, (today - self.due_date).days)

    def __str__(self) -> str:
        return f"{self.dose_name} due {self.due_date.isoformat()} [{self.status}]"
