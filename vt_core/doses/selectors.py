# vt_core/doses/selectors.py
from __future__ import annotations

from typing import Any, Optional
from uuid import UUID

from django.db.models import QuerySet
from django.utils.dateparse import parse_date

from vt_core.common.exceptions import InvalidInput, NotFound
from vt_core.doses.models import DoseRecord, DoseStatus


class DoseSelector:
    @staticmethod
    def get_dose(
        *,
        dose_id: UUID,
        account_id: Optional[UUID] = None,
        for_update: bool = False,
    ) -> DoseRecord:
        qs = DoseRecord.objects.select_related("subject").filter(id=dose_id)
        if account_id is not None:
            qs = qs.filter(subject__account_id=account_id)
        if for_update:
            qs = qs.select_for_update()
        dose = qs.first()
        if dose is None:
            raise NotFound("DoseRecord", dose_id)
        return dose

    @staticmethod
    def records_for_subject(*, subject_id: UUID) -> list[DoseRecord]:
        return list(DoseRecord.objects.filter(subject_id=subject_id).order_by("due_date", "sequence"))

    @staticmethod
    def list_doses(*, subject_id: UUID, params: Any) -> QuerySet[DoseRecord]:
        """
        Query params supported:
          - status in {UPCOMING, COMPLETED, MISSED}
          - due_before=ISO date (inclusive)
          - due_after=ISO date (inclusive)
          - ordering in {due_date, -due_date}
        """
        status_param = params.get("status")
        due_before = params.get("due_before")
        due_after = params.get("due_after")
        ordering = params.get("ordering")

        qs = DoseRecord.objects.filter(subject_id=subject_id)

        if status_param:
            status_param = status_param.upper()
            if status_param not in DoseStatus.values:
                raise InvalidInput(f"status is invalid. Allowed: {sorted(DoseStatus.values)}")
            qs = qs.filter(status=status_param)

        if due_before:
            d = parse_date(due_before)
            if not d:
                raise InvalidInput("due_before is invalid. Use ISO date (YYYY-MM-DD).")
            qs = qs.filter(due_date__lte=d)

        if due_after:
            d = parse_date(due_after)
            if not d:
                raise InvalidInput("due_after is invalid. Use ISO date (YYYY-MM-DD).")
            qs = qs.filter(due_date__gte=d)

        allowed = {"due_date", "-due_date"}
        if ordering:
            if ordering not in allowed:
                raise InvalidInput(f"ordering is invalid. Allowed: {sorted(allowed)}")
            return qs.order_by(ordering, "sequence")

        return qs.order_by("due_date", "sequence")
