# vt_core/common/clock.py
from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Protocol

from django.utils import timezone


class Clock(Protocol):
    def now(self) -> datetime:
        ...


class SystemClock:
    """
    Wall clock. Returns aware datetimes, same as django.utils.timezone.now().
    """

    def now(self) -> datetime:
        return timezone.now()


class FrozenClock:
    """
    Manually driven clock.

    Sweep, scoring and reminder firing all read "now" from the store clock,
    so swapping this in makes them agree on one simulated instant.
    """

    def __init__(self, at: datetime):
        self._at = _aware(at)

    def now(self) -> datetime:
        return self._at

    def set(self, at: datetime) -> None:
        self._at = _aware(at)

    def advance(self, **delta) -> datetime:
        self._at = self._at + timedelta(**delta)
        return self._at


def _aware(value: datetime) -> datetime:
    if timezone.is_naive(value):
        return timezone.make_aware(value)
    return value


def local_date(moment: datetime) -> date:
    """
    Calendar date of `moment` in the project time zone.
    Due dates are calendar dates, so every overdue check compares against this.
    """
    return timezone.localdate(_aware(moment))
