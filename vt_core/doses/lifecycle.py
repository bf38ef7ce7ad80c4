# vt_core/doses/lifecycle.py
"""
Dose status state machine.

    UPCOMING --(sweep: due_date < today)--> MISSED
    UPCOMING --(caregiver: mark completed)--> COMPLETED
    MISSED   --(caregiver: mark completed)--> COMPLETED

COMPLETED is terminal. Nothing here touches the database.
"""
from __future__ import annotations

import copy
from datetime import date, datetime
from typing import Iterable, Optional

from vt_core.common.clock import local_date
from vt_core.doses.models import DoseRecord, DoseStatus


def initial_status(due_date: date, today: date) -> str:
    if due_date < today:
        return DoseStatus.MISSED
    return DoseStatus.UPCOMING


def is_overdue(record: DoseRecord, today: date) -> bool:
    return record.status == DoseStatus.UPCOMING and record.due_date < today


def complete(record: DoseRecord, *, completed_at: datetime, notes: Optional[str] = None) -> bool:
    """
    Apply the caregiver "mark completed" transition in place.

    Idempotent: an already COMPLETED record keeps its original completed_at
    and False is returned.
    """
    if record.status == DoseStatus.COMPLETED:
        return False

    record.status = DoseStatus.COMPLETED
    record.completed_at = completed_at
    if notes is not None:
        record.notes = notes
    return True


def sweep(records: Iterable[DoseRecord], now: datetime) -> tuple[list[DoseRecord], bool]:
    """
    Promote overdue UPCOMING records to MISSED.

    Pure: input records are never mutated. Promoted records come back as
    copies with only `status` changed; untouched records are returned as-is
    (same objects), so callers can tell them apart by identity.
    """
    today = local_date(now)
    updated: list[DoseRecord] = []
    changed = False

    for record in records:
        if is_overdue(record, today):
            record = copy.copy(record)
            record.status = DoseStatus.MISSED
            changed = True
        updated.append(record)

    return updated, changed
