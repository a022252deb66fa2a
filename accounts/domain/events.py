"""
Account domain events.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from core.domain.events import DomainEvent


@dataclass(frozen=True, kw_only=True)
class AdminCreated(DomainEvent):
    """Event raised when the setup flow creates an admin."""

    admin_id: uuid.UUID
    username: str

    def to_dict(self) -> Dict[str, Any]:
        return {**super().to_dict(), "username": self.username}


@dataclass(frozen=True, kw_only=True)
class VerificationCodeIssued(DomainEvent):
    """Event raised when a one-time code is stored and emailed."""

    admin_id: uuid.UUID
    expires_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {**super().to_dict(), "expires_at": self.expires_at.isoformat()}


@dataclass(frozen=True, kw_only=True)
class AdminAuthenticated(DomainEvent):
    """Event raised when a one-time code is accepted and a session issued."""

    admin_id: uuid.UUID
    ip_address: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {**super().to_dict(), "ip_address": self.ip_address}
