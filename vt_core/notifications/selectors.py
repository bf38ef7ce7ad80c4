# vt_core/notifications/selectors.py
from __future__ import annotations

from typing import Optional
from uuid import UUID

from django.db.models import QuerySet

from vt_core.common.exceptions import NotFound
from vt_core.notifications.models import Notification


def notifications_qs(*, account_id: UUID, is_read: Optional[bool] = None) -> QuerySet[Notification]:
    qs = Notification.objects.filter(account_id=account_id)
    if is_read is not None:
        qs = qs.filter(is_read=is_read)
    return qs.order_by("-created_at")


def get_notification(*, account_id: UUID, notification_id: UUID) -> Notification:
    notif = Notification.objects.filter(id=notification_id, account_id=account_id).first()
    if notif is None:
        raise NotFound("Notification", notification_id)
    return notif
