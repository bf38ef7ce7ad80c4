# vt_core/reminders/api/views.py
from __future__ import annotations

from rest_framework import mixins, status, viewsets
from rest_framework.response import Response

from vt_core.common.api.scope import AccountScopedViewMixin
from vt_core.reminders.api.serializers import ReminderCreateSerializer, ReminderSerializer
from vt_core.reminders.scheduler import get_active_scheduler
from vt_core.reminders.selectors import reminders_for_account
from vt_core.reminders.services import ReminderService


class ReminderViewSet(AccountScopedViewMixin, mixins.ListModelMixin, viewsets.GenericViewSet):
    serializer_class = ReminderSerializer
    filterset_fields = ["subject", "dose", "consumed"]
    ordering_fields = ["fire_at", "created_at"]

    def get_queryset(self):
        return reminders_for_account(account_id=self._require_account(self.request))

    def create(self, request):
        account_id = self._require_account(request)

        ser = ReminderCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        v = ser.validated_data

        reminder = ReminderService.schedule_reminder(
            store=self.store,
            scheduler=get_active_scheduler(),
            dose_id=v["dose_id"],
            fire_at=v["fire_at"],
            message=v.get("message"),
            subject_id=v.get("subject_id"),
            account_id=account_id,
        )
        return Response(ReminderSerializer(reminder).data, status=status.HTTP_201_CREATED)

    def destroy(self, request, pk=None):
        account_id = self._require_account(request)
        ReminderService.cancel_reminder(
            store=self.store,
            scheduler=get_active_scheduler(),
            reminder_id=pk,
            account_id=account_id,
        )
        return Response(status=status.HTTP_204_NO_CONTENT)
