# vt_core/doses/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from vt_core.doses.models import DoseRecord


class DoseRecordSerializer(serializers.ModelSerializer):
    subject_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = DoseRecord
        fields = [
            "id",
            "subject_id",
            "sequence",
            "dose_name",
            "disease",
            "due_date",
            "status",
            "completed_at",
            "notes",
            "is_manual",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class DoseCreateSerializer(serializers.Serializer):
    subject_id = serializers.UUIDField()
    dose_name = serializers.CharField(max_length=128)
    due_date = serializers.DateField()
    disease = serializers.CharField(max_length=128, required=False, allow_blank=True, default="")


class DoseCompleteSerializer(serializers.Serializer):
    completed_at = serializers.DateTimeField(required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)
