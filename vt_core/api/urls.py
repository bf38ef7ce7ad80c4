# vt_core/api/urls.py
from __future__ import annotations

from rest_framework.routers import DefaultRouter

from vt_core.doses.api.views import DoseViewSet
from vt_core.notifications.api.views import NotificationViewSet
from vt_core.reminders.api.views import ReminderViewSet
from vt_core.subjects.api.views import SubjectViewSet

router = DefaultRouter()

router.register(r"subjects", SubjectViewSet, basename="subjects")
router.register(r"doses", DoseViewSet, basename="doses")
router.register(r"reminders", ReminderViewSet, basename="reminders")
router.register(r"notifications", NotificationViewSet, basename="notifications")

urlpatterns = router.urls
