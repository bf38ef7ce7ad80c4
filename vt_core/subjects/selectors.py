# vt_core/subjects/selectors.py
from __future__ import annotations

from uuid import UUID

from django.db.models import QuerySet

from vt_core.common.exceptions import NotFound
from vt_core.subjects.models import Subject


def get_subject(*, subject_id: UUID, account_id: UUID | None = None) -> Subject:
    """
    account_id=None skips the ownership filter (engine-internal callers).
    """
    qs = Subject.objects.filter(id=subject_id)
    if account_id is not None:
        qs = qs.filter(account_id=account_id)
    subject = qs.first()
    if subject is None:
        raise NotFound("Subject", subject_id)
    return subject


def search_subjects(*, account_id: UUID, q: str | None = None) -> QuerySet[Subject]:
    qs = Subject.objects.filter(account_id=account_id)

    qv = (q or "").strip()
    if qv:
        qs = qs.filter(full_name__icontains=qv)

    return qs.order_by("birthdate", "full_name")
