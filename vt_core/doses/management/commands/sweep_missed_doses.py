# vt_core/doses/management/commands/sweep_missed_doses.py
from __future__ import annotations

from uuid import UUID

from django.core.management.base import BaseCommand, CommandError

from vt_core.common.store import get_store
from vt_core.doses.services import DoseService


def _uuid_option(opts, name: str):
    raw = opts[name.replace("-", "_")]
    if raw is None:
        return None
    try:
        return UUID(raw)
    except ValueError:
        raise CommandError(f"--{name} must be a UUID, got {raw!r}.") from None


class Command(BaseCommand):
    help = "Promote overdue UPCOMING doses to MISSED. Safe to re-run; a second run changes nothing."

    def add_arguments(self, parser):
        parser.add_argument("--dry-run", action="store_true", help="Print counts only; do not write.")
        parser.add_argument("--subject-id", type=str, default=None, help="Optional subject UUID filter.")
        parser.add_argument("--account-id", type=str, default=None, help="Optional account UUID filter.")

    def handle(self, *args, **opts):
        dry = opts["dry_run"]

        promoted = DoseService.sweep(
            store=get_store(),
            subject_id=_uuid_option(opts, "subject-id"),
            account_id=_uuid_option(opts, "account-id"),
            dry_run=dry,
        )

        if dry:
            self.stdout.write(f"DRY RUN: doses that would be marked missed: {promoted}")
        else:
            self.stdout.write(f"Doses marked missed: {promoted}")
