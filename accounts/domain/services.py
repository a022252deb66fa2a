"""
Account domain services.

One-time code generation and the checks applied to a code at login.
"""
import secrets
from datetime import datetime, timedelta
from typing import Optional

from accounts.domain.admin import Admin
from core.domain.exceptions import (
    CodeExpiredError,
    CodeMismatchError,
    NoCodeRequestedError,
    ResendThrottledError,
)

DEFAULT_CODE_LENGTH = 8


class VerificationCodeGenerator:
    """Domain service for one-time login codes."""

    @staticmethod
    def generate(length: int = DEFAULT_CODE_LENGTH) -> str:
        """
        Generate a numeric code, uniformly distributed and zero-padded.

        Args:
            length: Number of digits

        Returns:
            Code string of exactly ``length`` digits
        """
        return str(secrets.randbelow(10**length)).zfill(length)


class VerificationCodeValidator:
    """Domain service for checking a submitted code against the stored one."""

    @staticmethod
    def validate(admin: Admin, code: str, current_time: datetime) -> None:
        """
        Check a submitted code.

        Expiry is evaluated here rather than by clearing stale codes, so an
        expired code is rejected even while it is still stored.

        Raises:
            NoCodeRequestedError: No code outstanding
            CodeExpiredError: The outstanding code is past its expiry
            CodeMismatchError: The code does not match
        """
        if admin.verification_code is None or admin.verification_expires_at is None:
            raise NoCodeRequestedError()
        if admin.verification_expires_at < current_time:
            raise CodeExpiredError()
        if not secrets.compare_digest(admin.verification_code.encode(), (code or "").encode()):
            raise CodeMismatchError()


class ResendPolicy:
    """
    Server-side cooldown between code requests.

    A code issued less than ``cooldown`` ago still has more than
    ``ttl - cooldown`` of validity left; further requests are rejected until
    that window passes.
    """

    def __init__(self, ttl: timedelta, cooldown: timedelta):
        self.ttl = ttl
        self.cooldown = cooldown

    def retry_after(self, admin: Admin, current_time: datetime) -> Optional[int]:
        """Seconds to wait before another code may be issued, or None."""
        if not admin.has_pending_code or self.cooldown <= timedelta(0):
            return None
        remaining = admin.code_remaining_validity(current_time)
        wait = remaining - (self.ttl - self.cooldown)
        if wait <= timedelta(0):
            return None
        return max(1, int(wait.total_seconds() + 0.999))

    def check(self, admin: Admin, current_time: datetime) -> None:
        retry_after = self.retry_after(admin, current_time)
        if retry_after is not None:
            raise ResendThrottledError(retry_after=retry_after)
