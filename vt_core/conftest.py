# vt_core/conftest.py
import uuid
from datetime import date, datetime, timezone as dt_timezone

import pytest
from rest_framework.test import APIClient

from vt_core.common.clock import FrozenClock
from vt_core.common.store import Store, get_store
from vt_core.reminders.scheduler import ReminderScheduler
from vt_core.subjects.services import SubjectService

# Fixed "now" for engine tests: mid-2025, UTC (test settings use TIME_ZONE=UTC).
NOW = datetime(2025, 6, 1, 12, 0, tzinfo=dt_timezone.utc)
BIRTHDATE = date(2025, 1, 1)


@pytest.fixture
def account_id():
    return uuid.uuid4()


@pytest.fixture
def other_account_id():
    return uuid.uuid4()


@pytest.fixture
def clock():
    return FrozenClock(NOW)


@pytest.fixture
def store(clock):
    return Store(clock=clock)


@pytest.fixture
def app_store(monkeypatch, clock):
    """
    The process store used by the API and management commands, driven by `clock`.
    """
    s = get_store()
    monkeypatch.setattr(s, "clock", clock)
    return s


@pytest.fixture
def notified():
    return []


@pytest.fixture
def scheduler(store, notified):
    """
    Scheduler with a recording callback instead of the event bus.
    Never started; tests drive it through fire_due().
    """
    return ReminderScheduler(store=store, notify=notified.append)


@pytest.fixture
def subject(db, store, account_id):
    """
    Born 2025-01-01, created at 2025-06-01: the birth to 14-week doses (21)
    are already MISSED, the remaining 12 are UPCOMING.
    """
    return SubjectService.create_subject(
        store=store,
        account_id=account_id,
        full_name="Asha Rao",
        birthdate=BIRTHDATE,
        gender="female",
        relationship="daughter",
    )


@pytest.fixture
def api_client():
    return APIClient()
