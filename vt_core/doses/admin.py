# vt_core/doses/admin.py
from __future__ import annotations

from django.contrib import admin

from vt_core.doses.models import DoseRecord


@admin.register(DoseRecord)
class DoseRecordAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "subject",
        "dose_name",
        "due_date",
        "status",
        "completed_at",
        "is_manual",
    )
    list_filter = ("status", "is_manual")
    search_fields = ("id", "dose_name", "subject__full_name")
    ordering = ("subject", "due_date", "sequence")

    readonly_fields = ("due_date", "created_at", "updated_at")

    list_select_related = ("subject",)

    fieldsets = (
        ("Dose", {"fields": ("subject", "sequence", "dose_name", "disease", "is_manual")}),
        ("Timing", {"fields": ("due_date", "status", "completed_at")}),
        ("Notes", {"fields": ("notes",)}),
        ("Audit", {"fields": ("created_at", "updated_at")}),
    )
