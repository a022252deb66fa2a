"""
Admin domain entity.

The operator account that logs in to manage licenses. The login flow keeps
its state (the one-time code and its expiry) on this entity.
"""
import secrets
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from typing import Optional

from core.domain.value_objects import Email


@dataclass(frozen=True)
class Admin:
    """
    Admin domain entity.

    Immutable; every state change returns a new instance.
    """

    id: uuid.UUID
    username: str
    name: str
    email: Email
    password_hash: str
    secret_key: str
    mobile_number: str
    profile_image: Optional[str]
    last_known_ip: Optional[str]
    last_login_at: Optional[datetime]
    verification_code: Optional[str]
    verification_expires_at: Optional[datetime]
    is_setup_enabled: bool
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate admin entity."""
        if not self.username or not self.username.strip():
            raise ValueError("Username is required")
        if not self.name or not self.name.strip():
            raise ValueError("Name is required")
        if (self.verification_code is None) != (self.verification_expires_at is None):
            raise ValueError("Verification code and expiry must be set together")

    @classmethod
    def create(
        cls,
        username: str,
        name: str,
        email: str,
        password_hash: str,
        secret_key: str,
        mobile_number: str,
        profile_image: Optional[str] = None,
        last_known_ip: Optional[str] = None,
        admin_id: Optional[uuid.UUID] = None,
    ) -> "Admin":
        """
        Create a new Admin entity.

        The setup gate stays closed after creation until the admin
        re-opens it from their profile.
        """
        now = datetime.now(timezone.utc)
        return cls(
            id=admin_id or uuid.uuid4(),
            username=username,
            name=name,
            email=Email(email),
            password_hash=password_hash,
            secret_key=secret_key,
            mobile_number=mobile_number,
            profile_image=profile_image,
            last_known_ip=last_known_ip,
            last_login_at=None,
            verification_code=None,
            verification_expires_at=None,
            is_setup_enabled=False,
            created_at=now,
            updated_at=now,
        )

    def matches_secret_key(self, secret_key: str) -> bool:
        """Exact, case-sensitive comparison against the stored secret key."""
        return secrets.compare_digest(self.secret_key.encode(), (secret_key or "").encode())

    @property
    def has_pending_code(self) -> bool:
        return self.verification_code is not None

    def code_remaining_validity(self, current_time: datetime) -> timedelta:
        """Time left before the outstanding code expires (zero when none)."""
        if self.verification_expires_at is None:
            return timedelta(0)
        return max(self.verification_expires_at - current_time, timedelta(0))

    def issue_verification_code(self, code: str, expires_at: datetime) -> "Admin":
        """Store a new one-time code, replacing any outstanding one."""
        return replace(
            self,
            verification_code=code,
            verification_expires_at=expires_at,
            updated_at=datetime.now(timezone.utc),
        )

    def complete_login(self, logged_in_at: datetime, ip_address: Optional[str] = None) -> "Admin":
        """Consume the one-time code and record the login."""
        return replace(
            self,
            verification_code=None,
            verification_expires_at=None,
            last_login_at=logged_in_at,
            last_known_ip=ip_address or self.last_known_ip,
            updated_at=logged_in_at,
        )

    def update_profile(
        self,
        name: Optional[str] = None,
        username: Optional[str] = None,
        mobile_number: Optional[str] = None,
    ) -> "Admin":
        return replace(
            self,
            name=name if name is not None else self.name,
            username=username if username is not None else self.username,
            mobile_number=mobile_number if mobile_number is not None else self.mobile_number,
            updated_at=datetime.now(timezone.utc),
        )

    def change_password(self, password_hash: str) -> "Admin":
        return replace(self, password_hash=password_hash, updated_at=datetime.now(timezone.utc))

    def set_setup_enabled(self, enabled: bool) -> "Admin":
        return replace(self, is_setup_enabled=enabled, updated_at=datetime.now(timezone.utc))

    def clear_expired_code(self, current_time: datetime) -> "Admin":
        """Drop the code pair if it has expired; otherwise unchanged."""
        if self.verification_expires_at is None or self.verification_expires_at >= current_time:
            return self
        return replace(self, verification_code=None, verification_expires_at=None)
