# vt_core/schedule/generator.py
from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Iterable
from uuid import UUID

from vt_core.common.clock import local_date
from vt_core.common.exceptions import InvalidInput
from vt_core.doses.lifecycle import initial_status
from vt_core.doses.models import DoseRecord
from vt_core.schedule.template import SCHEDULE_TEMPLATE, DoseDefinition, OffsetUnit


def _add_months(start: date, months: int) -> date:
    """
    Calendar month addition keeping the day of month, clamped to the
    last day of the target month (Jan 31 + 1 month -> Feb 28/29,
    Feb 29 + 12 months -> Feb 28 on a non-leap year).
    """
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def add_offset(start: date, *, unit: str, amount: int) -> date:
    if unit == OffsetUnit.DAYS:
        return start + timedelta(days=amount)
    if unit == OffsetUnit.WEEKS:
        return start + timedelta(weeks=amount)
    if unit == OffsetUnit.MONTHS:
        return _add_months(start, amount)
    if unit == OffsetUnit.YEARS:
        return _add_months(start, amount * 12)
    raise InvalidInput(
        f"Unrecognised offset unit: {unit!r}.",
        details={"unit": unit, "allowed": list(OffsetUnit.ALL)},
    )


def due_date_for(birthdate: date, definition: DoseDefinition) -> date:
    return add_offset(birthdate, unit=definition.unit, amount=definition.amount)


def generate_schedule(
    birthdate: date,
    subject_id: UUID,
    *,
    now: datetime,
    template: Iterable[DoseDefinition] = SCHEDULE_TEMPLATE,
) -> list[DoseRecord]:
    """
    Expand a birthdate into unsaved DoseRecord rows, one per template row, in template order.

    Status at generation:
    - MISSED   if due_date is before the local date of `now`
    - UPCOMING otherwise (a dose due today is still UPCOMING)

    Persistence is the caller's job (see DoseService.create_schedule).
    """
    today = local_date(now)
    records: list[DoseRecord] = []

    for sequence, definition in enumerate(template):
        due_date = due_date_for(birthdate, definition)
        records.append(
            DoseRecord(
                subject_id=subject_id,
                sequence=sequence,
                dose_name=definition.name,
                disease=definition.disease,
                due_date=due_date,
                status=initial_status(due_date, today),
            )
        )

    return records
