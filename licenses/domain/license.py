"""
License domain entity.

This is the core domain entity representing a license.
It contains business logic and is independent of infrastructure.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

from core.domain.value_objects import Email, VerificationOutcome
from licenses.domain.license_key import validate_license_key


@dataclass(frozen=True)
class LicenseCreator:
    """Name and email of the admin who created a license."""

    name: str
    email: str


@dataclass(frozen=True)
class License:
    """
    License domain entity.

    A null ``expires_at`` means the license never expires. ``activated_at``
    is stamped by the first successful verification and never changed after.
    """

    id: uuid.UUID
    key: str
    email: Email
    domain: Optional[str]
    is_active: bool
    expires_at: Optional[datetime]
    activated_at: Optional[datetime]
    created_by_id: Optional[uuid.UUID]
    created_at: datetime
    updated_at: datetime
    created_by: Optional[LicenseCreator] = None

    def __post_init__(self):
        """Validate license entity."""
        validate_license_key(self.key)

    @classmethod
    def create(
        cls,
        key: str,
        email: str,
        domain: Optional[str] = None,
        expires_at: Optional[datetime] = None,
        created_by_id: Optional[uuid.UUID] = None,
        license_id: Optional[uuid.UUID] = None,
    ) -> "License":
        """
        Create a new, active, not yet activated License entity.

        Raises:
            InvalidLicenseKeyFormatError: Key does not match the format
        """
        now = datetime.now(timezone.utc)
        return cls(
            id=license_id or uuid.uuid4(),
            key=key,
            email=Email(email),
            domain=domain or None,
            is_active=True,
            expires_at=expires_at,
            activated_at=None,
            created_by_id=created_by_id,
            created_at=now,
            updated_at=now,
        )

    def is_expired(self, current_time: Optional[datetime] = None) -> bool:
        """True if the expiry is set and strictly in the past."""
        if self.expires_at is None:
            return False
        check_time = current_time or datetime.now(timezone.utc)
        return self.expires_at < check_time

    def matches_domain(self, domain: Optional[str]) -> bool:
        """
        Domain binding check.

        A license without a stored domain accepts any caller, and a caller
        that sends no domain is never domain-checked.
        """
        if not domain or self.domain is None:
            return True
        return self.domain == domain

    def verify(
        self, domain: Optional[str] = None, current_time: Optional[datetime] = None
    ) -> VerificationOutcome:
        """Run the ordered verification checks against this license."""
        if not self.is_active:
            return VerificationOutcome.INACTIVE
        if self.is_expired(current_time):
            return VerificationOutcome.EXPIRED
        if not self.matches_domain(domain):
            return VerificationOutcome.DOMAIN_MISMATCH
        return VerificationOutcome.VALID

    def edit(self, key: str, email: str, expires_at: Optional[datetime]) -> "License":
        """
        Overwrite key, email and expiry. Active flag and activation are kept.
        """
        return replace(
            self,
            key=key,
            email=Email(email),
            expires_at=expires_at,
            updated_at=datetime.now(timezone.utc),
        )

    def extend(self, new_expiration: datetime) -> "License":
        """Set a new expiry and re-enable the license."""
        return replace(
            self,
            expires_at=new_expiration,
            is_active=True,
            updated_at=datetime.now(timezone.utc),
        )

    def mark_activated(self, activated_at: datetime) -> "License":
        """Stamp the first activation; a license already activated is unchanged."""
        if self.activated_at is not None:
            return self
        return replace(self, activated_at=activated_at)
