# vt_core/subjects/api/views.py
from __future__ import annotations

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from vt_core.common.api.pagination import paginate
from vt_core.common.api.scope import AccountScopedViewMixin
from vt_core.compliance.selectors import ComplianceSelector
from vt_core.doses.api.serializers import DoseRecordSerializer
from vt_core.doses.selectors import DoseSelector
from vt_core.doses.services import DoseService
from vt_core.reminders.scheduler import get_active_scheduler
from vt_core.subjects.api.serializers import (
    ComplianceScoreSerializer,
    SubjectCreateSerializer,
    SubjectSerializer,
    SubjectUpdateSerializer,
)
from vt_core.subjects.models import Subject
from vt_core.subjects.selectors import get_subject, search_subjects
from vt_core.subjects.services import SubjectService


class SubjectViewSet(AccountScopedViewMixin, viewsets.ViewSet):
    # lets drf-spectacular type the path parameter
    serializer_class = SubjectSerializer
    queryset = Subject.objects.none()

    def _ser(self, subject, **kwargs):
        return SubjectSerializer(subject, context={"today": self.store.today()}, **kwargs)

    def list(self, request):
        account_id = self._require_account(request)
        qs = search_subjects(account_id=account_id, q=request.query_params.get("q"))
        data = self._ser(qs[:200], many=True).data
        return Response(data, status=status.HTTP_200_OK)

    def create(self, request):
        account_id = self._require_account(request)

        ser = SubjectCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        subject = SubjectService.create_subject(
            store=self.store,
            account_id=account_id,
            **ser.validated_data,
        )
        return Response(self._ser(subject).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        account_id = self._require_account(request)
        subject = get_subject(subject_id=pk, account_id=account_id)
        return Response(self._ser(subject).data, status=status.HTTP_200_OK)

    def partial_update(self, request, pk=None):
        account_id = self._require_account(request)

        ser = SubjectUpdateSerializer(data=request.data, partial=True)
        ser.is_valid(raise_exception=True)

        subject = SubjectService.update_subject(
            store=self.store,
            account_id=account_id,
            subject_id=pk,
            data=ser.validated_data,
        )
        return Response(self._ser(subject).data, status=status.HTTP_200_OK)

    def destroy(self, request, pk=None):
        account_id = self._require_account(request)
        SubjectService.delete_subject(
            store=self.store,
            account_id=account_id,
            subject_id=pk,
            scheduler=get_active_scheduler(),
        )
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(methods=["GET"], detail=True, url_path="doses")
    def doses(self, request, pk=None):
        """
        Sweep first so statuses reflect the current date, then list.
        """
        account_id = self._require_account(request)
        subject = get_subject(subject_id=pk, account_id=account_id)

        DoseService.sweep(store=self.store, subject_id=subject.id)
        qs = DoseSelector.list_doses(subject_id=subject.id, params=request.query_params)
        return paginate(request, qs, DoseRecordSerializer)

    @action(methods=["GET"], detail=True, url_path="compliance")
    def compliance(self, request, pk=None):
        account_id = self._require_account(request)
        subject = get_subject(subject_id=pk, account_id=account_id)

        DoseService.sweep(store=self.store, subject_id=subject.id)
        result = ComplianceSelector.score_subject(store=self.store, subject_id=subject.id)

        data = ComplianceScoreSerializer(
            {
                "subject_id": subject.id,
                "score": result.score,
                "raw_score": result.raw_score,
                "total": result.total,
                "completed": result.completed,
                "missed": result.missed,
                "upcoming": result.upcoming,
                "total_penalty": result.total_penalty,
            }
        ).data
        return Response(data, status=status.HTTP_200_OK)
