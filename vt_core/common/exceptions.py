# vt_core/common/exceptions.py
from __future__ import annotations

from typing import Any


class DomainError(Exception):
    """
    Base class for errors raised by the engine.
    Returned to the immediate caller; never logged or retried here.
    """

    code = "error"

    def __init__(self, message: str = "", *, details: Any = None):
        super().__init__(message)
        self.message = message
        self.details = details


class NotFound(DomainError):
    code = "not_found"

    def __init__(self, entity: str, entity_id: Any):
        super().__init__(
            f"{entity} not found.",
            details={"entity": entity, "id": str(entity_id)},
        )
        self.entity = entity
        self.entity_id = entity_id


class InvalidInput(DomainError):
    code = "validation_error"
