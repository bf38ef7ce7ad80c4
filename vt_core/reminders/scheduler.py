# vt_core/reminders/scheduler.py
"""
Single-worker reminder scheduler.

One min-heap of (fire_at, seq, reminder_id) entries, woken by the nearest
deadline. The heap is a cache of the database: `load()` rebuilds it from
unconsumed Reminder rows, so a restart loses nothing.

Locking:
- the store lock guards reminder rows (firing re-checks the row under it)
- the condition guards the heap; arming never waits on a firing reminder
- order is always store lock -> condition, never the reverse
"""
from __future__ import annotations

import heapq
import itertools
import logging
import threading
from datetime import datetime
from typing import Callable, Optional
from uuid import UUID

from django.apps import apps
from django.db import close_old_connections, connection

from vt_core.common.store import Store
from vt_core.reminders.events import publish_reminder_fired
from vt_core.reminders.models import Reminder

logger = logging.getLogger(__name__)

Notify = Callable[[Reminder], None]


class ReminderScheduler:
    def __init__(
        self,
        *,
        store: Store,
        notify: Optional[Notify] = None,
        max_wait: float = 60.0,
    ):
        self.store = store
        self.notify: Notify = notify or publish_reminder_fired
        self.max_wait = max_wait

        self._heap: list[tuple[datetime, int, UUID]] = []
        self._armed: dict[UUID, datetime] = {}
        self._seq = itertools.count()
        self._cond = threading.Condition()

        self._thread: Optional[threading.Thread] = None
        self._stopping = False

    # -------------------------
    # Heap management
    # -------------------------
    def _arm_locked(self, reminder_id: UUID, fire_at: datetime) -> bool:
        if self._armed.get(reminder_id) == fire_at:
            return False
        self._armed[reminder_id] = fire_at
        heapq.heappush(self._heap, (fire_at, next(self._seq), reminder_id))
        self._compact_locked()
        return True

    def _compact_locked(self) -> None:
        # Cancelled or re-timed entries linger until popped; rebuild once they outnumber live ones.
        if len(self._heap) <= 2 * len(self._armed):
            return
        self._heap = [entry for entry in self._heap if self._armed.get(entry[2]) == entry[0]]
        heapq.heapify(self._heap)

    def arm(self, reminder_id: UUID, fire_at: datetime) -> None:
        with self._cond:
            if self._arm_locked(reminder_id, fire_at):
                self._cond.notify_all()

    def disarm(self, reminder_id: UUID) -> bool:
        with self._cond:
            removed = self._armed.pop(reminder_id, None) is not None
            if removed:
                self._compact_locked()
                self._cond.notify_all()
            return removed

    def pending(self) -> int:
        with self._cond:
            return len(self._armed)

    def is_armed(self, reminder_id: UUID) -> bool:
        with self._cond:
            return reminder_id in self._armed

    def _discard_stale(self) -> None:
        while self._heap:
            fire_at, _, reminder_id = self._heap[0]
            if self._armed.get(reminder_id) == fire_at:
                return
            heapq.heappop(self._heap)

    def next_deadline(self) -> Optional[datetime]:
        with self._cond:
            self._discard_stale()
            return self._heap[0][0] if self._heap else None

    def pop_due(self, now: datetime) -> list[UUID]:
        due: list[UUID] = []
        with self._cond:
            self._discard_stale()
            while self._heap and self._heap[0][0] <= now:
                _, _, reminder_id = heapq.heappop(self._heap)
                del self._armed[reminder_id]
                due.append(reminder_id)
                self._discard_stale()
        return due

    # -------------------------
    # Persistence
    # -------------------------
    def load(self) -> int:
        """
        Re-arm every unconsumed reminder from the database.
        Past-dated ones become due immediately. Returns how many were newly armed.
        """
        with self.store.lock:
            rows = list(Reminder.objects.filter(consumed=False).values_list("id", "fire_at"))
            with self._cond:
                armed = sum(1 for reminder_id, fire_at in rows if self._arm_locked(reminder_id, fire_at))
                if armed:
                    self._cond.notify_all()

        if armed:
            logger.info("re-armed %d pending reminder(s)", armed)
        return armed

    # -------------------------
    # Firing
    # -------------------------
    def fire(self, reminder_id: UUID) -> Optional[Reminder]:
        """
        Consume one reminder and notify exactly once.
        Returns None when the reminder was cancelled or already consumed.
        """
        with self.store.write():
            reminder = (
                Reminder.objects.select_related("subject")
                .select_for_update()
                .filter(id=reminder_id)
                .first()
            )
            if reminder is None or not reminder.mark_consumed(self.store.now()):
                return None

            reminder.save(update_fields=["consumed", "consumed_at", "updated_at"])
            self.notify(reminder)

        logger.info("reminder %s fired for dose %s", reminder.id, reminder.dose_id)
        return reminder

    def fire_due(self, now: Optional[datetime] = None) -> list[Reminder]:
        fired: list[Reminder] = []
        for reminder_id in self.pop_due(now or self.store.now()):
            try:
                reminder = self.fire(reminder_id)
            except Exception:
                # Left unconsumed in the database; the next load() re-arms it.
                logger.exception("reminder %s failed to fire", reminder_id)
                continue
            if reminder is not None:
                fired.append(reminder)
        return fired

    # -------------------------
    # Worker thread
    # -------------------------
    def _wait_timeout(self) -> float:
        deadline = self.next_deadline()
        if deadline is None:
            return self.max_wait
        delay = (deadline - self.store.now()).total_seconds()
        return max(0.0, min(delay, self.max_wait))

    def _run(self) -> None:
        logger.info("reminder scheduler started (%d pending)", self.pending())
        try:
            while True:
                with self._cond:
                    if self._stopping:
                        break
                    timeout = self._wait_timeout()
                    if timeout > 0:
                        self._cond.wait(timeout)
                    if self._stopping:
                        break

                close_old_connections()
                self.fire_due()
        finally:
            connection.close()
            logger.info("reminder scheduler stopped")

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stopping = False
        self._thread = threading.Thread(target=self._run, name="reminder-scheduler", daemon=True)
        self._thread.start()

    def stop(self, timeout: Optional[float] = None) -> None:
        with self._cond:
            self._stopping = True
            self._cond.notify_all()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None


def get_scheduler() -> ReminderScheduler:
    """
    The process scheduler created by RemindersConfig.ready().
    """
    return apps.get_app_config("reminders").scheduler


def get_active_scheduler() -> Optional[ReminderScheduler]:
    """
    The process scheduler only while its worker runs (i.e. inside `run_scheduler`).
    Elsewhere (API workers) reminders are left to the worker's next load().
    """
    scheduler = get_scheduler()
    return scheduler if scheduler.running else None
