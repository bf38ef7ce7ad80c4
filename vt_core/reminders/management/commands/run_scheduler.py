# vt_core/reminders/management/commands/run_scheduler.py
from __future__ import annotations

import logging
import threading
import time

from django.conf import settings
from django.core.management.base import BaseCommand

from vt_core.common.store import get_store
from vt_core.doses.services import DoseService
from vt_core.reminders.scheduler import get_scheduler

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Run the reminder scheduler and the periodic missed-dose sweep."

    def add_arguments(self, parser):
        parser.add_argument(
            "--interval",
            type=int,
            default=None,
            help="Seconds between sweeps (default: VT_SWEEP_INTERVAL_SECONDS).",
        )
        parser.add_argument(
            "--reload-interval",
            type=int,
            default=None,
            help="Seconds between reminder reloads (default: VT_REMINDER_RELOAD_SECONDS).",
        )
        parser.add_argument(
            "--once",
            action="store_true",
            help="Reload reminders, sweep, fire everything due, then exit.",
        )

    def handle(self, *args, **options):
        store = get_store()
        scheduler = get_scheduler()
        interval = options["interval"] or settings.VT_SWEEP_INTERVAL_SECONDS
        reload_interval = options["reload_interval"] or settings.VT_REMINDER_RELOAD_SECONDS

        if options["once"]:
            armed = scheduler.load()
            swept = DoseService.sweep(store=store)
            fired = scheduler.fire_due()
            self.stdout.write(
                self.style.SUCCESS(
                    f"Reminders armed: {armed}, doses marked missed: {swept}, reminders fired: {len(fired)}"
                )
            )
            return

        stop = threading.Event()
        scheduler.load()
        scheduler.start()
        self.stdout.write(
            self.style.SUCCESS(
                f"Scheduler running (reload every {reload_interval}s, sweep every {interval}s). Ctrl+C to stop."
            )
        )

        try:
            self.serve(
                store=store,
                scheduler=scheduler,
                stop=stop,
                sweep_interval=interval,
                reload_interval=reload_interval,
            )
        except KeyboardInterrupt:
            logger.info("interrupted, shutting down")
        finally:
            scheduler.stop()

    def serve(self, *, store, scheduler, stop: threading.Event, sweep_interval: float, reload_interval: float) -> None:
        """
        Reload reminders every `reload_interval` seconds and sweep every
        `sweep_interval` seconds until `stop` is set.
        """
        next_sweep = time.monotonic() + sweep_interval
        while not stop.wait(reload_interval):
            # Picks up reminders written by other processes (API workers).
            scheduler.load()
            if time.monotonic() >= next_sweep:
                DoseService.sweep(store=store)
                next_sweep = time.monotonic() + sweep_interval
