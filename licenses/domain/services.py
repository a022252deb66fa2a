"""
License domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""
from datetime import datetime
from typing import Optional

from core.domain.value_objects import VerificationOutcome
from licenses.domain.license import License
from licenses.domain.license_key import generate_license_key


class LicenseKeyGenerator:
    """Domain service for license key generation."""

    @staticmethod
    def generate() -> str:
        """
        Generate a license key.

        Returns:
            Generated license key string
        """
        return generate_license_key()


class LicenseVerifier:
    """Domain service for the public license check."""

    @staticmethod
    def verify(
        license: Optional[License],
        domain: Optional[str],
        current_time: datetime,
    ) -> VerificationOutcome:
        """
        Verify a looked-up license.

        Checks run in order and the first failure decides the outcome:
        not found, inactive, expired, domain mismatch.

        Args:
            license: License found for the key, or None
            domain: Domain supplied by the caller, if any
            current_time: Time to compare the expiry against

        Returns:
            Verification outcome
        """
        if license is None:
            return VerificationOutcome.NOT_FOUND
        return license.verify(domain=domain, current_time=current_time)
