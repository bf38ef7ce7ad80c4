# vt_core/subjects/apps.py
from django.apps import AppConfig


class SubjectsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "vt_core.subjects"
    label = "subjects"
