"""
Django management command to clear expired one-time login codes.

Optional maintenance: expired codes are rejected when checked whether or
not this runs.
"""

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand
from django.utils import timezone

from accounts.application.handlers.maintenance_handlers import (
    PurgeExpiredVerificationCodesHandler,
)
from accounts.infrastructure.models import Admin as AdminModel
from accounts.infrastructure.repositories.django_admin_repository import DjangoAdminRepository


class Command(BaseCommand):
    """Command to clear expired verification codes."""

    help = "Clear expired one-time login codes"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Dry run mode - only report how many codes would be cleared",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        # pylint: disable=no-member
        expired = AdminModel.objects.filter(verification_expires_at__lt=timezone.now())
        self.stdout.write(f"Found {expired.count()} expired verification code(s)")

        if options["dry_run"]:
            self.stdout.write(self.style.WARNING("DRY RUN - No changes will be made"))
            return

        handler = PurgeExpiredVerificationCodesHandler(admin_repository=DjangoAdminRepository())
        cleared = async_to_sync(handler.handle)()
        self.stdout.write(self.style.SUCCESS(f"Cleared {cleared} expired verification code(s)"))
