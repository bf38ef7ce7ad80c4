from datetime import date, datetime, timedelta, timezone as dt_timezone

from vt_core.doses import lifecycle
from vt_core.doses.models import DoseRecord, DoseStatus

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=dt_timezone.utc)
TODAY = date(2025, 6, 1)


def _dose(due: date, status=DoseStatus.UPCOMING, **kw) -> DoseRecord:
    return DoseRecord(dose_name=kw.pop("dose_name", "DPT 1"), due_date=due, status=status, **kw)


def test_initial_status_day_boundary():
    assert lifecycle.initial_status(TODAY - timedelta(days=1), TODAY) == DoseStatus.MISSED
    assert lifecycle.initial_status(TODAY, TODAY) == DoseStatus.UPCOMING
    assert lifecycle.initial_status(TODAY + timedelta(days=1), TODAY) == DoseStatus.UPCOMING


def test_sweep_promotes_overdue_upcoming_only():
    overdue = _dose(TODAY - timedelta(days=10))
    due_today = _dose(TODAY)
    future = _dose(TODAY + timedelta(days=3))

    updated, changed = lifecycle.sweep([overdue, due_today, future], NOW)

    assert changed is True
    assert [r.status for r in updated] == [DoseStatus.MISSED, DoseStatus.UPCOMING, DoseStatus.UPCOMING]
    assert updated[1] is due_today
    assert updated[2] is future


def test_sweep_does_not_mutate_input():
    overdue = _dose(TODAY - timedelta(days=1))

    updated, _ = lifecycle.sweep([overdue], NOW)

    assert overdue.status == DoseStatus.UPCOMING
    assert updated[0] is not overdue
    assert updated[0].status == DoseStatus.MISSED
    assert updated[0].pk == overdue.pk


def test_sweep_is_idempotent():
    records = [_dose(TODAY - timedelta(days=d)) for d in (0, 1, 30)]

    once, changed_once = lifecycle.sweep(records, NOW)
    twice, changed_twice = lifecycle.sweep(once, NOW)

    assert changed_once is True
    assert changed_twice is False
    assert all(a is b for a, b in zip(once, twice))


def test_sweep_never_touches_completed_or_missed():
    completed = _dose(TODAY - timedelta(days=60), status=DoseStatus.COMPLETED, completed_at=NOW)
    missed = _dose(TODAY - timedelta(days=60), status=DoseStatus.MISSED)

    updated, changed = lifecycle.sweep([completed, missed], NOW)

    assert changed is False
    assert updated[0] is completed
    assert updated[0].status == DoseStatus.COMPLETED
    assert updated[1] is missed


def test_sweep_empty_set():
    assert lifecycle.sweep([], NOW) == ([], False)


def test_complete_from_upcoming_and_missed():
    upcoming = _dose(TODAY + timedelta(days=5))
    missed = _dose(TODAY - timedelta(days=5), status=DoseStatus.MISSED)

    assert lifecycle.complete(upcoming, completed_at=NOW) is True
    assert lifecycle.complete(missed, completed_at=NOW, notes="catch-up at clinic") is True

    assert upcoming.status == DoseStatus.COMPLETED
    assert upcoming.completed_at == NOW
    assert missed.status == DoseStatus.COMPLETED
    assert missed.notes == "catch-up at clinic"


def test_complete_is_idempotent_and_keeps_first_date():
    dose = _dose(TODAY)
    lifecycle.complete(dose, completed_at=NOW)

    later = NOW + timedelta(days=3)
    assert lifecycle.complete(dose, completed_at=later, notes="again") is False
    assert dose.completed_at == NOW
    assert dose.notes == ""


def test_is_overdue():
    assert lifecycle.is_overdue(_dose(TODAY - timedelta(days=1)), TODAY) is True
    assert lifecycle.is_overdue(_dose(TODAY), TODAY) is False
    assert lifecycle.is_overdue(_dose(TODAY - timedelta(days=1), status=DoseStatus.MISSED), TODAY) is False
