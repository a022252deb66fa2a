"""
License DTOs for API responses.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from core.domain.value_objects import VerificationOutcome
from licenses.domain.license import License


@dataclass
class LicenseDTO:
    """DTO for license information."""

    id: uuid.UUID
    key: str
    email: str
    domain: Optional[str]
    is_active: bool
    is_expired: bool
    expires_at: Optional[datetime]
    activated_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime
    created_by_name: Optional[str] = None
    created_by_email: Optional[str] = None

    @classmethod
    def from_entity(cls, license: License) -> "LicenseDTO":
        return cls(
            id=license.id,
            key=license.key,
            email=str(license.email),
            domain=license.domain,
            is_active=license.is_active,
            is_expired=license.is_expired(),
            expires_at=license.expires_at,
            activated_at=license.activated_at,
            created_at=license.created_at,
            updated_at=license.updated_at,
            created_by_name=license.created_by.name if license.created_by else None,
            created_by_email=license.created_by.email if license.created_by else None,
        )


@dataclass
class LicenseVerificationDTO:
    """DTO for the public verification response."""

    outcome: VerificationOutcome
    expires_at: Optional[datetime] = None

    @property
    def valid(self) -> bool:
        return self.outcome.is_valid

    @property
    def message(self) -> str:
        return self.outcome.message
