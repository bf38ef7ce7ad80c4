# vt_core/common/middleware.py
from __future__ import annotations

from typing import Optional
from uuid import UUID

from django.http import JsonResponse
from django.utils.deprecation import MiddlewareMixin

from vt_core.common.api.exceptions import build_error_envelope

HDR_ACCOUNT = "X-Account-Id"

MISSING_ACCOUNT_MSG = "Missing account header. Provide X-Account-Id."
INVALID_ACCOUNT_MSG = "Invalid account header. X-Account-Id must be a UUID."


def parse_account_id(value) -> Optional[UUID]:
    try:
        return UUID(str(value))
    except (TypeError, ValueError):
        return None


class AccountScopeMiddleware(MiddlewareMixin):
    """
    Enforces account scope for API requests.

    Behavior:
      - Enforced for /api/v1/* only.
      - Docs/schema/admin endpoints: public.
      - Missing header -> 400, invalid UUID -> 400 (error envelope).
      - On success -> attaches request.account_id
    """

    ACCOUNT_META_KEYS = ("HTTP_X_ACCOUNT_ID",)

    ENFORCED_PREFIXES = ("/api/v1/",)

    PUBLIC_PATH_PREFIXES = (
        "/admin/",
        "/api/docs/",
        "/api/schema/",
    )

    ALLOW_NO_SCOPE_EXACT_PATHS = ("/api/v1/",)

    def _get_meta_first(self, request, keys: tuple[str, ...]) -> Optional[str]:
        for k in keys:
            v = request.META.get(k)
            if v:
                return v
        return None

    def _json_error(self, request, *, status_code: int, code: str, message: str) -> JsonResponse:
        return JsonResponse(
            build_error_envelope(request=request, code=code, message=message, details=None),
            status=status_code,
        )

    def process_request(self, request):
        request.account_id = None

        path = getattr(request, "path", "") or ""

        if any(path.startswith(p) for p in self.PUBLIC_PATH_PREFIXES):
            return None

        if not any(path.startswith(p) for p in self.ENFORCED_PREFIXES):
            return None

        if path in self.ALLOW_NO_SCOPE_EXACT_PATHS:
            return None

        raw = self._get_meta_first(request, self.ACCOUNT_META_KEYS)
        if not raw:
            return self._json_error(
                request,
                status_code=400,
                code="validation_error",
                message=MISSING_ACCOUNT_MSG,
            )

        account_id = parse_account_id(raw)
        if account_id is None:
            return self._json_error(
                request,
                status_code=400,
                code="validation_error",
                message=INVALID_ACCOUNT_MSG,
            )

        request.account_id = account_id
        return None
