"""
Public license verification handler.
"""
import logging
from datetime import datetime, timezone

from core import metrics
from core.infrastructure.events import event_bus
from licenses.application.commands.verify_license import VerifyLicenseCommand
from licenses.application.dto.license_dto import LicenseVerificationDTO
from licenses.domain.events import LicenseActivated
from licenses.domain.services import LicenseVerifier
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class VerifyLicenseHandler:
    """Handler for VerifyLicenseCommand."""

    def __init__(self, license_repository: LicenseRepository):
        self.license_repository = license_repository

    async def handle(self, command: VerifyLicenseCommand) -> LicenseVerificationDTO:
        """
        Verify a license key.

        The only write is the activation stamp on the first valid check. It
        is a conditional update, so concurrent first checks keep one stamp.

        Args:
            command: VerifyLicenseCommand

        Returns:
            Outcome, plus the expiry for valid licenses
        """
        now = datetime.now(timezone.utc)
        license = await self.license_repository.find_by_key(command.key)
        outcome = LicenseVerifier.verify(license, command.domain, now)

        metrics.license_verifications_total.labels(outcome=outcome.value).inc()
        logger.info(
            "License verification: %s",
            outcome.value,
            extra={
                "outcome": outcome.value,
                "license_id": str(license.id) if license else None,
                "domain": command.domain,
            },
        )

        if not outcome.is_valid:
            return LicenseVerificationDTO(outcome=outcome)

        if license.activated_at is None:
            stamped = await self.license_repository.mark_activated(license.id, now)
            if stamped:
                await event_bus.publish(
                    LicenseActivated(
                        aggregate_id=str(license.id),
                        license_id=license.id,
                        domain=command.domain,
                    )
                )

        return LicenseVerificationDTO(outcome=outcome, expires_at=license.expires_at)
