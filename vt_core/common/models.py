# vt_core/common/models.py
from __future__ import annotations

import uuid
from django.db import models


class TimeStampedModel(models.Model):
    """
    Standard timestamps for all entities.
    """
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class UUIDModel(TimeStampedModel):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    class Meta:
        abstract = True


class AccountScopedModel(UUIDModel):
    """
    Caregiver-owned root rows carry the owning account.
    Child rows (doses, reminders) inherit scope through their subject.
    """
    account_id = models.UUIDField(db_index=True)

    class Meta:
        abstract = True
