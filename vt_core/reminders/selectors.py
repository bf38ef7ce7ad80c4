# vt_core/reminders/selectors.py
from __future__ import annotations

from typing import Optional
from uuid import UUID

from django.db.models import QuerySet

from vt_core.common.exceptions import NotFound
from vt_core.reminders.models import Reminder


def get_reminder(*, reminder_id: UUID, account_id: Optional[UUID] = None) -> Reminder:
    qs = Reminder.objects.select_related("subject", "dose").filter(id=reminder_id)
    if account_id is not None:
        qs = qs.filter(subject__account_id=account_id)
    reminder = qs.first()
    if reminder is None:
        raise NotFound("Reminder", reminder_id)
    return reminder


def reminders_for_account(*, account_id: UUID) -> QuerySet[Reminder]:
    return (
        Reminder.objects.select_related("subject", "dose")
        .filter(subject__account_id=account_id)
        .order_by("fire_at", "created_at")
    )


def pending_reminders(*, dose_id: Optional[UUID] = None) -> QuerySet[Reminder]:
    qs = Reminder.objects.filter(consumed=False)
    if dose_id is not None:
        qs = qs.filter(dose_id=dose_id)
    return qs.order_by("fire_at")
