# vt_core/compliance/scoring.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from vt_core.common.clock import local_date
from vt_core.doses.models import DoseRecord, DoseStatus

ZERO = Decimal("0")
HUNDRED = Decimal("100")


@dataclass(frozen=True)
class ComplianceScore:
    score: int          # weighted, penalises long-overdue doses
    raw_score: int      # plain completed / total
    total: int
    completed: int
    missed: int
    upcoming: int
    total_penalty: Decimal


def penalty_weight(overdue_days: int) -> Decimal:
    """
    Escalating penalty for a MISSED dose by how long it has been overdue.
    """
    if overdue_days >= 7:
        return Decimal("2.0")
    if overdue_days >= 4:
        return Decimal("1.0")
    if overdue_days >= 1:
        return Decimal("0.5")
    return ZERO


def round_half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def score(records: Iterable[DoseRecord], now: datetime) -> ComplianceScore:
    """
    Weighted adherence score in [0, 100].

    score     = round(max(0, (completed - total_penalty) / total) * 100)
    raw_score = round(completed / total * 100)

    An empty record set is vacuously compliant (100 / 100).
    """
    today = local_date(now)

    total = completed = missed = upcoming = 0
    total_penalty = ZERO

    for record in records:
        total += 1
        if record.status == DoseStatus.COMPLETED:
            completed += 1
        elif record.status == DoseStatus.MISSED:
            missed += 1
            total_penalty += penalty_weight(record.overdue_days(today))
        else:
            upcoming += 1

    if total == 0:
        return ComplianceScore(
            score=100,
            raw_score=100,
            total=0,
            completed=0,
            missed=0,
            upcoming=0,
            total_penalty=ZERO,
        )

    ratio = max(ZERO, (Decimal(completed) - total_penalty) / Decimal(total))
    raw_ratio = Decimal(completed) / Decimal(total)

    return ComplianceScore(
        score=round_half_up(ratio * HUNDRED),
        raw_score=round_half_up(raw_ratio * HUNDRED),
        total=total,
        completed=completed,
        missed=missed,
        upcoming=upcoming,
        total_penalty=total_penalty,
    )
