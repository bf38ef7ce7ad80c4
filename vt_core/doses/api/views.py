# vt_core/doses/api/views.py
from __future__ import annotations

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from vt_core.common.api.scope import AccountScopedViewMixin
from vt_core.doses.api.serializers import (
    DoseCompleteSerializer,
    DoseCreateSerializer,
    DoseRecordSerializer,
)
from vt_core.doses.models import DoseRecord
from vt_core.doses.selectors import DoseSelector
from vt_core.doses.services import DoseService


class DoseViewSet(AccountScopedViewMixin, viewsets.ViewSet):
    serializer_class = DoseRecordSerializer
    queryset = DoseRecord.objects.none()

    def create(self, request):
        account_id = self._require_account(request)

        ser = DoseCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        v = ser.validated_data

        dose = DoseService.add_dose(
            store=self.store,
            subject_id=v["subject_id"],
            dose_name=v["dose_name"],
            due_date=v["due_date"],
            disease=v.get("disease", ""),
            account_id=account_id,
        )
        return Response(DoseRecordSerializer(dose).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        account_id = self._require_account(request)
        dose = DoseSelector.get_dose(dose_id=pk, account_id=account_id)
        return Response(DoseRecordSerializer(dose).data, status=status.HTTP_200_OK)

    @action(methods=["POST"], detail=True, url_path="complete")
    def complete(self, request, pk=None):
        account_id = self._require_account(request)

        ser = DoseCompleteSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        v = ser.validated_data

        dose = DoseService.mark_completed(
            store=self.store,
            dose_id=pk,
            completed_at=v.get("completed_at"),
            notes=v.get("notes"),
            account_id=account_id,
        )
        return Response(DoseRecordSerializer(dose).data, status=status.HTTP_200_OK)

    @action(methods=["POST"], detail=False, url_path="sweep")
    def sweep(self, request):
        account_id = self._require_account(request)
        promoted = DoseService.sweep(store=self.store, account_id=account_id)
        return Response({"promoted": promoted}, status=status.HTTP_200_OK)
