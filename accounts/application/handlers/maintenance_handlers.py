"""
Optional maintenance for stale login codes.

Expired codes are already rejected when checked; purging them only tidies
the table.
"""
import logging
from datetime import datetime, timezone

from accounts.ports.admin_repository import AdminRepository

logger = logging.getLogger(__name__)


class PurgeExpiredVerificationCodesHandler:
    """Clears code/expiry pairs whose expiry has passed."""

    def __init__(self, admin_repository: AdminRepository):
        self.admin_repository = admin_repository

    async def handle(self) -> int:
        cleared = await self.admin_repository.clear_expired_verification_codes(
            datetime.now(timezone.utc)
        )
        logger.info("Purged expired verification codes", extra={"cleared": cleared})
        return cleared
