# vt_core/notifications/apps.py
from django.apps import AppConfig


class NotificationsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "vt_core.notifications"
    label = "notifications"

    def ready(self):
        # Registers the reminder.fired subscriber.
        from vt_core.notifications import subscribers  # noqa: F401
