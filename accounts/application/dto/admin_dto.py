"""
Account DTOs for API responses.

None of these carry the password hash, the secret key or the one-time code.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from accounts.domain.admin import Admin


@dataclass
class AdminProfileDTO:
    """DTO for an admin's profile."""

    id: uuid.UUID
    username: str
    name: str
    email: str
    mobile_number: str
    profile_image: Optional[str]
    last_known_ip: Optional[str]
    last_login_at: Optional[datetime]
    is_setup_enabled: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, admin: Admin) -> "AdminProfileDTO":
        return cls(
            id=admin.id,
            username=admin.username,
            name=admin.name,
            email=str(admin.email),
            mobile_number=admin.mobile_number,
            profile_image=admin.profile_image,
            last_known_ip=admin.last_known_ip,
            last_login_at=admin.last_login_at,
            is_setup_enabled=admin.is_setup_enabled,
            created_at=admin.created_at,
            updated_at=admin.updated_at,
        )


@dataclass
class VerificationCodeSentDTO:
    """DTO returned after a code has been emailed."""

    email: str
    expires_at: datetime
    resend_available_at: datetime


@dataclass
class AuthenticatedSessionDTO:
    """DTO returned when a login completes."""

    token: str
    expires_at: datetime
    admin_id: uuid.UUID
    email: str
    name: str


@dataclass
class SetupAccessDTO:
    """DTO for the setup gate."""

    is_allowed: bool
    admin_count: int
