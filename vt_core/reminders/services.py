# vt_core/reminders/services.py
from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from vt_core.common.exceptions import InvalidInput
from vt_core.common.store import Store
from vt_core.doses.models import DoseRecord, DoseStatus
from vt_core.doses.selectors import DoseSelector
from vt_core.reminders.models import Reminder
from vt_core.reminders.scheduler import ReminderScheduler
from vt_core.reminders.selectors import get_reminder


def default_message(dose: DoseRecord) -> str:
    state = "is overdue" if dose.status == DoseStatus.MISSED else "is due soon"
    return f"Reminder: {dose.subject.full_name}'s {dose.dose_name} vaccine {state}."


class ReminderService:
    """
    Reminder write-model operations.

    Notes:
    - A reminder is armed as soon as its row is written when a running scheduler
      is passed; otherwise the worker picks it up on its next load(). Past fire_at
      values fire on the next scheduler pass.
    - Duplicate unconsumed reminders on one dose are allowed.
    - Firing (consume + notify) belongs to ReminderScheduler.fire.
    """

    @staticmethod
    def schedule_reminder(
        *,
        store: Store,
        scheduler: Optional[ReminderScheduler] = None,
        dose_id: UUID,
        fire_at: datetime,
        message: Optional[str] = None,
        subject_id: Optional[UUID] = None,
        account_id: Optional[UUID] = None,
    ) -> Reminder:
        with store.write():
            dose = DoseSelector.get_dose(dose_id=dose_id, account_id=account_id)

            if subject_id is not None and dose.subject_id != subject_id:
                raise InvalidInput(
                    "Dose does not belong to this subject.",
                    details={"dose_id": str(dose.id), "subject_id": str(subject_id)},
                )

            reminder = Reminder.objects.create(
                dose=dose,
                subject_id=dose.subject_id,
                fire_at=fire_at,
                message=(message or "").strip() or default_message(dose),
            )
            if scheduler is not None:
                scheduler.arm(reminder.id, reminder.fire_at)

        return reminder

    @staticmethod
    def cancel_reminder(
        *,
        store: Store,
        scheduler: Optional[ReminderScheduler] = None,
        reminder_id: UUID,
        account_id: Optional[UUID] = None,
    ) -> None:
        """
        Delete a reminder. Raises NotFound when absent.
        Deleting a consumed reminder only removes the row.
        """
        with store.write():
            reminder = get_reminder(reminder_id=reminder_id, account_id=account_id)
            reminder.delete()
            if scheduler is not None:
                scheduler.disarm(reminder_id)
