# vt_core/notifications/api/views.py
from __future__ import annotations

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from vt_core.common.api.pagination import paginate
from vt_core.common.api.scope import AccountScopedViewMixin
from vt_core.notifications.api.serializers import NotificationSerializer
from vt_core.notifications.models import Notification
from vt_core.notifications.selectors import notifications_qs
from vt_core.notifications.services import NotificationService


class NotificationViewSet(AccountScopedViewMixin, viewsets.ViewSet):
    serializer_class = NotificationSerializer
    queryset = Notification.objects.none()

    def list(self, request):
        account_id = self._require_account(request)

        is_read = request.query_params.get("is_read")
        qs = notifications_qs(
            account_id=account_id,
            is_read=(is_read == "true") if is_read in ("true", "false") else None,
        )
        return paginate(request, qs, NotificationSerializer)

    @action(methods=["POST"], detail=True, url_path="mark-read")
    def mark_read(self, request, pk=None):
        account_id = self._require_account(request)
        notif = NotificationService.mark_read(
            account_id=account_id,
            notification_id=pk,
            at=self.store.now(),
        )
        return Response(NotificationSerializer(notif).data, status=status.HTTP_200_OK)
