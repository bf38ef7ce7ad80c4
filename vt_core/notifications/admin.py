# vt_core/notifications/admin.py
from django.contrib import admin

from vt_core.notifications.models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ("id", "account_id", "title", "is_read", "created_at")
    list_filter = ("is_read",)
    search_fields = ("id", "body", "reminder_id", "subject_id")
    readonly_fields = ("created_at", "updated_at", "read_at")
