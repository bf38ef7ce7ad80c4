# vt_core/common/api/scope.py
from __future__ import annotations

from uuid import UUID

from rest_framework.exceptions import ValidationError as DRFValidationError

from vt_core.common.middleware import (
    INVALID_ACCOUNT_MSG,
    MISSING_ACCOUNT_MSG,
    parse_account_id,
)
from vt_core.common.store import Store, get_store


class AccountScopedViewMixin:
    """
    Thin API layer helpers:
    - account scope (middleware-attached, header fallback when middleware is off)
    - the process store handle passed into services/selectors
    """

    def _require_account(self, request) -> UUID:
        account_id = getattr(request, "account_id", None)
        if account_id:
            return account_id

        raw = request.META.get("HTTP_X_ACCOUNT_ID")
        if not raw:
            raise DRFValidationError({"detail": MISSING_ACCOUNT_MSG})
        parsed = parse_account_id(raw)
        if parsed is None:
            raise DRFValidationError({"detail": INVALID_ACCOUNT_MSG})
        return parsed

    @property
    def store(self) -> Store:
        return get_store()
