# vt_core/reminders/apps.py
from django.apps import AppConfig


class RemindersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "vt_core.reminders"
    label = "reminders"

    def ready(self):
        from vt_core.common.store import get_store
        from vt_core.reminders.scheduler import ReminderScheduler

        # Built here, started only by `manage.py run_scheduler` (no DB access at import time).
        self.scheduler = ReminderScheduler(store=get_store())
