# vt_core/compliance/selectors.py
from __future__ import annotations

from typing import Optional
from uuid import UUID

from vt_core.common.store import Store
from vt_core.compliance.scoring import ComplianceScore, score
from vt_core.doses.selectors import DoseSelector
from vt_core.subjects.selectors import get_subject


class ComplianceSelector:
    @staticmethod
    def score_subject(
        *,
        store: Store,
        subject_id: UUID,
        account_id: Optional[UUID] = None,
    ) -> ComplianceScore:
        """
        Score one subject's records as of the store clock.
        Does not sweep; callers that want fresh MISSED statuses run DoseService.sweep first.
        """
        subject = get_subject(subject_id=subject_id, account_id=account_id)
        with store.lock:
            records = DoseSelector.records_for_subject(subject_id=subject.id)
        return score(records, store.now())
