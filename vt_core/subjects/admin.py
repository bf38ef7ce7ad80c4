# vt_core/subjects/admin.py
from django.contrib import admin

from vt_core.subjects.models import Subject


@admin.register(Subject)
class SubjectAdmin(admin.ModelAdmin):
    list_display = (
        "full_name",
        "birthdate",
        "gender",
        "relationship",
        "account_id",
        "created_at",
    )
    list_filter = ("gender",)
    search_fields = ("full_name", "account_id")
    ordering = ("-created_at",)

    def get_readonly_fields(self, request, obj=None):
        # birthdate is fixed once the schedule exists
        if obj is not None:
            return ("birthdate", "created_at", "updated_at")
        return ("created_at", "updated_at")
