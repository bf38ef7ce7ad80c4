# vt_core/subjects/models.py
from __future__ import annotations

from datetime import date

from django.db import models

from vt_core.common.models import AccountScopedModel


class Gender(models.TextChoices):
    MALE = "male", "Male"
    FEMALE = "female", "Female"
    OTHER = "other", "Other"


class Subject(AccountScopedModel):
    """
    A tracked individual (child or family member) owned by one caregiver account.
    Birthdate is fixed at creation; age is always derived from it.
    """
    full_name = models.CharField(max_length=255)
    birthdate = models.DateField()
    gender = models.CharField(max_length=16, choices=Gender.choices, blank=True, default="")
    relationship = models.CharField(max_length=64, blank=True, default="")  # e.g. "daughter"

    class Meta:
        db_table = "subjects_subject"
        indexes = [
            models.Index(fields=["account_id", "full_name"]),
        ]

    def age_on(self, on: date) -> int:
        """Completed years of age on `on`."""
        years = on.year - self.birthdate.year
        if (on.month, on.day) < (self.birthdate.month, self.birthdate.day):
            years -= 1
        return max(0, years)

    def __str__(self) -> str:
        return f"{self.full_name} ({self.birthdate.isoformat()})"
