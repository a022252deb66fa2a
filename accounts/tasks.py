"""
Celery tasks for account maintenance.
"""
import logging

from asgiref.sync import async_to_sync

from LicenseKeyService.celery import app

from accounts.application.handlers.maintenance_handlers import (
    PurgeExpiredVerificationCodesHandler,
)
from accounts.infrastructure.repositories.django_admin_repository import DjangoAdminRepository

logger = logging.getLogger(__name__)


@app.task
def purge_expired_verification_codes_task() -> int:
    """Clear expired one-time codes. Optional; expiry is enforced at check time."""
    handler = PurgeExpiredVerificationCodesHandler(admin_repository=DjangoAdminRepository())
    return async_to_sync(handler.handle)()
