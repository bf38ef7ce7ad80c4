from rest_framework import serializers

from vt_core.notifications.models import Notification


class NotificationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Notification
        fields = [
            "id",
            "title",
            "body",
            "is_read",
            "read_at",
            "subject_id",
            "reminder_id",
            "dose_id",
            "created_at",
            "meta",
        ]
