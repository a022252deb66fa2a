"""
Unit tests for the two-step login handlers.
"""
import re
from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest

from accounts.application.commands.request_verification_code import (
    RequestVerificationCodeCommand,
)
from accounts.application.commands.verify_code import VerifyCodeCommand
from accounts.application.handlers.authentication_handlers import (
    RequestVerificationCodeHandler,
    VerifyCodeHandler,
)
from accounts.domain.events import AdminAuthenticated, VerificationCodeIssued
from accounts.infrastructure.sessions import SignedTokenSessionIssuer
from core.domain.exceptions import (
    CodeExpiredError,
    CodeMismatchError,
    DeliveryFailedError,
    InvalidCredentialsError,
    InvalidSecretKeyError,
    NoCodeRequestedError,
    ResendThrottledError,
)
from tests.fakes import (
    ADMIN_PASSWORD,
    ADMIN_SECRET_KEY,
    FailingEmailSender,
    InMemoryAdminRepository,
)

EMAIL = "alice@example.com"


def request_command(**overrides):
    fields = dict(email=EMAIL, password=ADMIN_PASSWORD, secret_key=ADMIN_SECRET_KEY)
    fields.update(overrides)
    return RequestVerificationCodeCommand(**fields)


def sent_code(email_sender) -> str:
    return re.search(r"\b(\d{8})\b", email_sender.sent[-1]["body"]).group(1)


@pytest.fixture
def request_handler(memory_admin_repository, password_hasher, email_sender):
    return RequestVerificationCodeHandler(
        admin_repository=memory_admin_repository,
        password_hasher=password_hasher,
        email_sender=email_sender,
    )


@pytest.fixture
def verify_handler(memory_admin_repository):
    return VerifyCodeHandler(
        admin_repository=memory_admin_repository, session_issuer=SignedTokenSessionIssuer()
    )


@pytest.mark.asyncio
class TestRequestVerificationCodeHandler:
    """Tests for RequestVerificationCodeHandler."""

    async def test_code_stored_and_emailed(
        self, request_handler, memory_admin_repository, email_sender, sample_admin, recorded_events
    ):
        """Test a code is persisted, emailed and not returned."""
        before = datetime.now(timezone.utc)

        result = await request_handler.handle(request_command())

        stored = await memory_admin_repository.find_by_id(sample_admin.id)
        assert re.fullmatch(r"\d{8}", stored.verification_code)
        assert before + timedelta(seconds=299) <= stored.verification_expires_at
        assert stored.verification_expires_at <= datetime.now(timezone.utc) + timedelta(seconds=300)
        assert result.expires_at == stored.verification_expires_at
        assert not hasattr(result, "code")

        assert len(email_sender.sent) == 1
        assert email_sender.sent[0]["to"] == EMAIL
        assert email_sender.sent[0]["subject"] == "Your Login Verification Code"
        assert sent_code(email_sender) == stored.verification_code
        assert len(recorded_events.of_type(VerificationCodeIssued)) == 1

    async def test_unknown_email(self, request_handler, email_sender):
        with pytest.raises(InvalidCredentialsError):
            await request_handler.handle(request_command(email="nobody@example.com"))
        assert email_sender.sent == []

    async def test_wrong_password(self, request_handler, email_sender):
        with pytest.raises(InvalidCredentialsError):
            await request_handler.handle(request_command(password="wrong"))
        assert email_sender.sent == []

    async def test_wrong_secret_key(self, request_handler, memory_admin_repository, sample_admin):
        """Test a secret key differing only in case is rejected."""
        with pytest.raises(InvalidSecretKeyError):
            await request_handler.handle(request_command(secret_key=ADMIN_SECRET_KEY.lower()))

        stored = await memory_admin_repository.find_by_id(sample_admin.id)
        assert stored.verification_code is None

    async def test_resend_within_cooldown_is_throttled(self, request_handler, email_sender):
        """Test an immediate second request is refused with a retry delay."""
        await request_handler.handle(request_command())

        with pytest.raises(ResendThrottledError) as exc_info:
            await request_handler.handle(request_command())

        assert 1 <= exc_info.value.retry_after <= 30
        assert len(email_sender.sent) == 1

    async def test_resend_after_cooldown_replaces_code(
        self, request_handler, memory_admin_repository, email_sender, sample_admin
    ):
        await request_handler.handle(request_command())
        first = await memory_admin_repository.find_by_id(sample_admin.id)
        # Age the outstanding code past the cooldown
        await memory_admin_repository.save(
            replace(
                first,
                verification_code="00000000",
                verification_expires_at=datetime.now(timezone.utc) + timedelta(seconds=200),
            )
        )

        await request_handler.handle(request_command())

        second = await memory_admin_repository.find_by_id(sample_admin.id)
        assert second.verification_code == sent_code(email_sender)
        assert second.verification_expires_at > first.verification_expires_at - timedelta(seconds=1)
        assert len(email_sender.sent) == 2

    async def test_delivery_failure_keeps_code(
        self, memory_admin_repository, password_hasher, sample_admin
    ):
        """Test a failed send raises but leaves the stored code in place."""
        handler = RequestVerificationCodeHandler(
            admin_repository=memory_admin_repository,
            password_hasher=password_hasher,
            email_sender=FailingEmailSender(),
        )

        with pytest.raises(DeliveryFailedError):
            await handler.handle(request_command())

        stored = await memory_admin_repository.find_by_id(sample_admin.id)
        assert stored.verification_code is not None


@pytest.mark.asyncio
class TestVerifyCodeHandler:
    """Tests for VerifyCodeHandler."""

    async def test_login_flow(
        self,
        request_handler,
        verify_handler,
        memory_admin_repository,
        email_sender,
        sample_admin,
        recorded_events,
    ):
        """Test the emailed code yields a 24 hour session and is consumed."""
        await request_handler.handle(request_command())
        code = sent_code(email_sender)

        result = await verify_handler.handle(
            VerifyCodeCommand(
                email=EMAIL, code=code, secret_key=ADMIN_SECRET_KEY, ip_address="203.0.113.9"
            )
        )

        assert result.admin_id == sample_admin.id
        assert result.email == EMAIL
        assert result.name == "Alice Admin"
        remaining = result.expires_at - datetime.now(timezone.utc)
        assert timedelta(hours=23, minutes=59) < remaining <= timedelta(hours=24)

        stored = await memory_admin_repository.find_by_id(sample_admin.id)
        assert stored.verification_code is None
        assert stored.verification_expires_at is None
        assert stored.last_login_at is not None
        assert stored.last_known_ip == "203.0.113.9"
        assert len(recorded_events.of_type(AdminAuthenticated)) == 1

        with pytest.raises(NoCodeRequestedError):
            await verify_handler.handle(
                VerifyCodeCommand(email=EMAIL, code=code, secret_key=ADMIN_SECRET_KEY)
            )

    async def test_no_code_requested(self, verify_handler):
        with pytest.raises(NoCodeRequestedError):
            await verify_handler.handle(
                VerifyCodeCommand(email=EMAIL, code="12345678", secret_key=ADMIN_SECRET_KEY)
            )

    async def test_expired_code(self, verify_handler, memory_admin_repository, sample_admin):
        """Test an expired code is rejected and stays stored."""
        expired = sample_admin.issue_verification_code(
            "12345678", datetime.now(timezone.utc) - timedelta(seconds=1)
        )
        await memory_admin_repository.save(expired)

        with pytest.raises(CodeExpiredError):
            await verify_handler.handle(
                VerifyCodeCommand(email=EMAIL, code="12345678", secret_key=ADMIN_SECRET_KEY)
            )

        stored = await memory_admin_repository.find_by_id(sample_admin.id)
        assert stored.verification_code == "12345678"

    async def test_code_mismatch(self, verify_handler, memory_admin_repository, sample_admin):
        await memory_admin_repository.save(
            sample_admin.issue_verification_code(
                "12345678", datetime.now(timezone.utc) + timedelta(minutes=5)
            )
        )

        with pytest.raises(CodeMismatchError):
            await verify_handler.handle(
                VerifyCodeCommand(email=EMAIL, code="87654321", secret_key=ADMIN_SECRET_KEY)
            )

    async def test_secret_key_checked_before_code(self, verify_handler, memory_admin_repository, sample_admin):
        await memory_admin_repository.save(
            sample_admin.issue_verification_code(
                "12345678", datetime.now(timezone.utc) + timedelta(minutes=5)
            )
        )

        with pytest.raises(InvalidSecretKeyError):
            await verify_handler.handle(
                VerifyCodeCommand(email=EMAIL, code="12345678", secret_key="wrong")
            )

    async def test_unknown_email(self, verify_handler):
        with pytest.raises(InvalidCredentialsError):
            await verify_handler.handle(
                VerifyCodeCommand(email="nobody@example.com", code="12345678", secret_key="x")
            )


class StaleReadAdminRepository(InMemoryAdminRepository):
    """Returns each admin as first read, like a request that loaded the row early."""

    def __init__(self, admins=()):
        super().__init__(admins)
        self.first_reads = {}

    async def find_by_email(self, email):
        if email not in self.first_reads:
            self.first_reads[email] = await super().find_by_email(email)
        return self.first_reads[email]


@pytest.mark.asyncio
class TestVerifyCodeConsumedOnce:
    """Test a code read by two overlapping verifies yields one session."""

    async def test_second_verify_with_stale_read_is_rejected(self, sample_admin, recorded_events):
        pending = sample_admin.issue_verification_code(
            "12345678", datetime.now(timezone.utc) + timedelta(minutes=5)
        )
        repository = StaleReadAdminRepository([pending])
        handler = VerifyCodeHandler(
            admin_repository=repository, session_issuer=SignedTokenSessionIssuer()
        )
        command = VerifyCodeCommand(email=EMAIL, code="12345678", secret_key=ADMIN_SECRET_KEY)

        await handler.handle(command)

        with pytest.raises(NoCodeRequestedError):
            await handler.handle(command)

        assert len(recorded_events.of_type(AdminAuthenticated)) == 1
        stored = await repository.find_by_id(sample_admin.id)
        assert stored.verification_code is None
