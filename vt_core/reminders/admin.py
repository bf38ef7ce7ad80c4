# vt_core/reminders/admin.py
from __future__ import annotations

from django.contrib import admin

from vt_core.reminders.models import Reminder


@admin.register(Reminder)
class ReminderAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "subject",
        "dose",
        "fire_at",
        "consumed",
        "consumed_at",
        "created_at",
    )
    list_filter = ("consumed",)
    search_fields = ("id", "message", "subject__full_name")
    ordering = ("fire_at",)

    readonly_fields = ("consumed", "consumed_at", "created_at", "updated_at")

    list_select_related = ("subject", "dose")
