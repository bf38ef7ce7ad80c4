# vt_core/common/store.py
from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import date, datetime

from django.apps import apps
from django.db import transaction

from vt_core.common.clock import Clock, SystemClock, local_date


@dataclass
class Store:
    """
    Explicit handle to the shared dose/reminder record set.

    - clock: the single source of "now" for sweep, scoring and reminder firing
    - lock: one process-wide mutex; every mutation of DoseRecord/Reminder rows
      (sweep, completion, scheduling, cancellation, firing) runs under it
    """

    clock: Clock = field(default_factory=SystemClock)
    lock: threading.RLock = field(default_factory=threading.RLock)

    def now(self) -> datetime:
        return self.clock.now()

    def today(self) -> date:
        return local_date(self.clock.now())

    @contextmanager
    def write(self):
        """
        Serialize a mutation and commit it in one transaction.
        The DB write happens under the same lock as the in-memory decision.
        """
        with self.lock:
            with transaction.atomic():
                yield


def get_store() -> Store:
    """
    The process store created by CommonConfig.ready().
    Only the API/command layer should call this; core code takes `store=` explicitly.
    """
    return apps.get_app_config("common").store
