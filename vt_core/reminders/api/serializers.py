# vt_core/reminders/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from vt_core.reminders.models import Reminder


class ReminderSerializer(serializers.ModelSerializer):
    dose_id = serializers.UUIDField(read_only=True)
    subject_id = serializers.UUIDField(read_only=True)
    dose_name = serializers.CharField(source="dose.dose_name", read_only=True)

    class Meta:
        model = Reminder
        fields = [
            "id",
            "dose_id",
            "subject_id",
            "dose_name",
            "fire_at",
            "message",
            "consumed",
            "consumed_at",
            "created_at",
        ]
        read_only_fields = fields


class ReminderCreateSerializer(serializers.Serializer):
    dose_id = serializers.UUIDField()
    subject_id = serializers.UUIDField(required=False, allow_null=True)
    fire_at = serializers.DateTimeField()
    message = serializers.CharField(required=False, allow_blank=True, allow_null=True)
