# vt_core/doses/apps.py
from django.apps import AppConfig


class DosesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "vt_core.doses"
    label = "doses"
