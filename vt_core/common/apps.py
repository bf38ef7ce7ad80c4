# vt_core/common/apps.py
from django.apps import AppConfig


class CommonConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "vt_core.common"
    label = "common"

    def ready(self):
        from vt_core.common.clock import SystemClock
        from vt_core.common.store import Store

        # One store handle per process; passed explicitly to services/selectors/scheduler.
        self.store = Store(clock=SystemClock())
