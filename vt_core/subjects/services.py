# vt_core/subjects/services.py
from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING
from uuid import UUID

from vt_core.common.exceptions import InvalidInput
from vt_core.common.store import Store
from vt_core.doses.services import DoseService
from vt_core.reminders.models import Reminder
from vt_core.subjects.models import Subject
from vt_core.subjects.selectors import get_subject

if TYPE_CHECKING:
    from vt_core.reminders.scheduler import ReminderScheduler


class SubjectService:
    """
    Subject write-model operations.

    Notes:
    - Creating a subject generates its full dose schedule in the same transaction.
    - Birthdate is immutable; update_subject rejects any attempt to change it.
    - Deleting a subject cascades to its doses and reminders.
    """

    UPDATABLE_FIELDS = {"full_name", "gender", "relationship"}

    @staticmethod
    def create_subject(
        *,
        store: Store,
        account_id: UUID,
        full_name: str,
        birthdate: date,
        gender: str = "",
        relationship: str = "",
    ) -> Subject:
        if birthdate > store.today():
            raise InvalidInput(
                "Birthdate cannot be in the future.",
                details={"birthdate": birthdate.isoformat()},
            )

        with store.write():
            subject = Subject.objects.create(
                account_id=account_id,
                full_name=full_name,
                birthdate=birthdate,
                gender=gender or "",
                relationship=relationship or "",
            )
            DoseService.create_schedule(store=store, subject=subject)

        return subject

    @staticmethod
    def update_subject(
        *,
        store: Store,
        account_id: UUID,
        subject_id: UUID,
        data: dict,
    ) -> Subject:
        data = data or {}

        with store.write():
            subject = get_subject(subject_id=subject_id, account_id=account_id)

            if "birthdate" in data and data["birthdate"] != subject.birthdate:
                raise InvalidInput(
                    "Birthdate cannot be changed after creation.",
                    details={"birthdate": subject.birthdate.isoformat()},
                )

            updates = {k: v for k, v in data.items() if k in SubjectService.UPDATABLE_FIELDS}
            if not updates:
                return subject

            for k, v in updates.items():
                setattr(subject, k, v if v is not None else "")

            subject.save(update_fields=sorted(updates.keys()) + ["updated_at"])

        return subject

    @staticmethod
    def delete_subject(
        *,
        store: Store,
        account_id: UUID,
        subject_id: UUID,
        scheduler: "ReminderScheduler | None" = None,
    ) -> int:
        """
        Cascade delete. Returns the number of reminders that were still pending.
        """
        with store.write():
            subject = get_subject(subject_id=subject_id, account_id=account_id)
            pending = list(
                Reminder.objects.filter(subject_id=subject.id, consumed=False).values_list("id", flat=True)
            )
            subject.delete()

        if scheduler is not None:
            for reminder_id in pending:
                scheduler.disarm(reminder_id)

        return len(pending)
