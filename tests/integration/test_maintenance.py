"""
Integration tests for expired verification code maintenance.
"""

from datetime import timedelta
from io import StringIO

import pytest
from django.core.management import call_command
from django.utils import timezone

from accounts.infrastructure.models import Admin as AdminModel
from accounts.tasks import purge_expired_verification_codes_task


@pytest.fixture
def admins_with_codes(db_admin):
    AdminModel.objects.filter(id=db_admin.id).update(
        verification_code="12345678",
        verification_expires_at=timezone.now() - timedelta(minutes=1),
    )
    fresh = AdminModel.objects.create(
        username="fresh",
        name="Fresh",
        email="fresh@example.com",
        password_hash="x",
        secret_key="y",
        verification_code="87654321",
        verification_expires_at=timezone.now() + timedelta(minutes=4),
    )
    return db_admin, fresh


@pytest.mark.django_db
@pytest.mark.integration
class TestPurgeExpiredVerificationCodes:
    """Test the purge command and its Celery task."""

    def test_command_clears_only_expired(self, admins_with_codes):
        expired, fresh = admins_with_codes
        out = StringIO()

        call_command("purge_expired_verification_codes", stdout=out)

        assert "Cleared 1 expired verification code(s)" in out.getvalue()
        expired.refresh_from_db()
        fresh.refresh_from_db()
        assert expired.verification_code is None
        assert expired.verification_expires_at is None
        assert fresh.verification_code == "87654321"

    def test_command_dry_run(self, admins_with_codes):
        expired, _ = admins_with_codes
        out = StringIO()

        call_command("purge_expired_verification_codes", "--dry-run", stdout=out)

        assert "Found 1 expired verification code(s)" in out.getvalue()
        expired.refresh_from_db()
        assert expired.verification_code == "12345678"

    def test_task(self, admins_with_codes):
        assert purge_expired_verification_codes_task() == 1
        assert AdminModel.objects.filter(verification_code__isnull=False).count() == 1
