# vt_core/doses/services.py

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional
from uuid import UUID

from django.db.models import Max

from vt_core.common.exceptions import InvalidInput
from vt_core.common.store import Store
from vt_core.doses import lifecycle
from vt_core.doses.models import DoseRecord, DoseStatus
from vt_core.doses.selectors import DoseSelector
from vt_core.schedule.generator import generate_schedule
from vt_core.subjects.models import Subject
from vt_core.subjects.selectors import get_subject

logger = logging.getLogger(__name__)


class DoseService:
    """
    DoseRecord write-model operations.

    Notes:
    - Every mutation runs under store.write() (process lock + transaction).
    - Workflow: UPCOMING -> MISSED (sweep), UPCOMING/MISSED -> COMPLETED (caregiver).
    - mark_completed is idempotent and never rewrites completed_at.
    """

    # -------------------------
    # Create
    # -------------------------
    @staticmethod
    def create_schedule(*, store: Store, subject: Subject) -> list[DoseRecord]:
        records = generate_schedule(subject.birthdate, subject.id, now=store.now())
        with store.write():
            DoseRecord.objects.bulk_create(records)
        return records

    @staticmethod
    def add_dose(
        *,
        store: Store,
        subject_id: UUID,
        dose_name: str,
        due_date: date,
        disease: str = "",
        account_id: Optional[UUID] = None,
    ) -> DoseRecord:
        """
        Caregiver-added dose outside the template (catch-up, private vaccine).
        """
        with store.write():
            subject = get_subject(subject_id=subject_id, account_id=account_id)

            if due_date < subject.birthdate:
                raise InvalidInput(
                    "Dose cannot be due before the subject's birthdate.",
                    details={"due_date": due_date.isoformat(), "birthdate": subject.birthdate.isoformat()},
                )

            last = DoseRecord.objects.filter(subject_id=subject.id).aggregate(m=Max("sequence"))["m"]

            return DoseRecord.objects.create(
                subject=subject,
                sequence=0 if last is None else last + 1,
                dose_name=dose_name,
                disease=disease or "",
                due_date=due_date,
                status=lifecycle.initial_status(due_date, store.today()),
                is_manual=True,
            )

    # -------------------------
    # Caregiver transition
    # -------------------------
    @staticmethod
    def mark_completed(
        *,
        store: Store,
        dose_id: UUID,
        completed_at: Optional[datetime] = None,
        notes: Optional[str] = None,
        account_id: Optional[UUID] = None,
    ) -> DoseRecord:
        """
        UPCOMING/MISSED -> COMPLETED. Raises NotFound for an unknown dose.
        """
        with store.write():
            dose = DoseSelector.get_dose(dose_id=dose_id, account_id=account_id, for_update=True)

            changed = lifecycle.complete(dose, completed_at=completed_at or store.now(), notes=notes)
            if changed:
                dose.save(update_fields=["status", "completed_at", "notes", "updated_at"])

        return dose

    # -------------------------
    # Sweep (periodic reconciliation)
    # -------------------------
    @staticmethod
    def sweep(
        *,
        store: Store,
        subject_id: Optional[UUID] = None,
        account_id: Optional[UUID] = None,
        dry_run: bool = False,
    ) -> int:
        """
        Persisted form of lifecycle.sweep over the working set.
        Writes back only `status` of promoted rows. Returns how many were promoted.
        """
        with store.write():
            qs = DoseRecord.objects.filter(status=DoseStatus.UPCOMING)
            if subject_id is not None:
                qs = qs.filter(subject_id=subject_id)
            if account_id is not None:
                qs = qs.filter(subject__account_id=account_id)

            records = list(qs.select_for_update())
            updated, changed = lifecycle.sweep(records, store.now())
            if not changed:
                return 0

            promoted = [new for new, old in zip(updated, records) if new is not old]
            if not dry_run:
                DoseRecord.objects.bulk_update(promoted, ["status"])

        logger.info(
            "sweep %s %d dose(s) to MISSED",
            "would promote" if dry_run else "promoted",
            len(promoted),
        )
        return len(promoted)
