# vt_core/subjects/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from vt_core.subjects.models import Gender, Subject


class SubjectCreateSerializer(serializers.Serializer):
    full_name = serializers.CharField(max_length=255)
    birthdate = serializers.DateField()
    gender = serializers.ChoiceField(choices=Gender.choices, required=False, allow_blank=True, default="")
    relationship = serializers.CharField(max_length=64, required=False, allow_blank=True, default="")


class SubjectUpdateSerializer(serializers.Serializer):
    """
    Partial update contract (PATCH). birthdate is accepted only to be rejected
    by the service when it differs.
    """
    full_name = serializers.CharField(max_length=255, required=False)
    gender = serializers.ChoiceField(choices=Gender.choices, required=False, allow_blank=True)
    relationship = serializers.CharField(max_length=64, required=False, allow_blank=True)
    birthdate = serializers.DateField(required=False)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("At least one field is required.")
        return attrs


class SubjectSerializer(serializers.ModelSerializer):
    age = serializers.SerializerMethodField()

    class Meta:
        model = Subject
        fields = [
            "id",
            "account_id",
            "full_name",
            "birthdate",
            "age",
            "gender",
            "relationship",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_age(self, obj: Subject) -> int | None:
        today = self.context.get("today")
        return obj.age_on(today) if today else None


class ComplianceScoreSerializer(serializers.Serializer):
    subject_id = serializers.UUIDField()
    score = serializers.IntegerField()
    raw_score = serializers.IntegerField()
    total = serializers.IntegerField()
    completed = serializers.IntegerField()
    missed = serializers.IntegerField()
    upcoming = serializers.IntegerField()
    total_penalty = serializers.DecimalField(max_digits=8, decimal_places=1)
