"""
License domain events.

Domain events represent something that happened in the license domain.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from core.domain.events import DomainEvent


@dataclass(frozen=True, kw_only=True)
class LicenseCreated(DomainEvent):
    """Event raised when an admin creates a license."""

    license_id: uuid.UUID
    created_by_id: Optional[uuid.UUID]

    def to_dict(self) -> Dict[str, Any]:
        return {
            **super().to_dict(),
            "created_by_id": str(self.created_by_id) if self.created_by_id else None,
        }


@dataclass(frozen=True, kw_only=True)
class LicenseUpdated(DomainEvent):
    """Event raised when a license's key, email or expiry is edited."""

    license_id: uuid.UUID


@dataclass(frozen=True, kw_only=True)
class LicenseExtended(DomainEvent):
    """Event raised when a license gets a new expiry."""

    license_id: uuid.UUID
    new_expiration: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {**super().to_dict(), "new_expiration": self.new_expiration.isoformat()}


@dataclass(frozen=True, kw_only=True)
class LicenseDeleted(DomainEvent):
    """Event raised when a license is removed."""

    license_id: uuid.UUID


@dataclass(frozen=True, kw_only=True)
class LicenseActivated(DomainEvent):
    """Event raised by the first successful verification of a license."""

    license_id: uuid.UUID
    domain: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {**super().to_dict(), "domain": self.domain}
