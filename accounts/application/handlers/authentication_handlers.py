"""
Login handlers.

Two-step admin login. The first step checks the password and secret key,
stores a one-time code on the admin row and emails it. The second step
checks the code, clears it and issues a session.

Known limitation: requesting a new code while a verify is in flight replaces
the code the user is about to submit, and that verify then fails. Request
and verify are not otherwise serialized against each other.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from accounts.application.commands.request_verification_code import (
    RequestVerificationCodeCommand,
)
from accounts.application.commands.verify_code import VerifyCodeCommand
from accounts.application.dto.admin_dto import AuthenticatedSessionDTO, VerificationCodeSentDTO
from accounts.application.services.verification_email import build_verification_email
from accounts.domain.admin import Admin
from accounts.domain.events import AdminAuthenticated, VerificationCodeIssued
from accounts.domain.services import (
    DEFAULT_CODE_LENGTH,
    ResendPolicy,
    VerificationCodeGenerator,
    VerificationCodeValidator,
)
from accounts.ports.admin_repository import AdminRepository
from accounts.ports.email_sender import EmailSender
from accounts.ports.password_hasher import PasswordHasher
from accounts.ports.session_issuer import SessionIdentity, SessionIssuer
from core.domain.exceptions import (
    DeliveryFailedError,
    InvalidCredentialsError,
    InvalidSecretKeyError,
    NoCodeRequestedError,
)
from core.infrastructure.events import event_bus

logger = logging.getLogger(__name__)

DEFAULT_CODE_TTL_SECONDS = 300
DEFAULT_RESEND_COOLDOWN_SECONDS = 30


async def _find_admin_for_login(
    admin_repository: AdminRepository,
    email: str,
    secret_key: str,
    password_check: Optional[Callable[[Admin], bool]] = None,
) -> Admin:
    """
    Load the admin for a login step and check the shared secret.

    Step one also passes a password check; an unknown email and a wrong
    password fail the same way.
    """
    admin = await admin_repository.find_by_email(email)
    if not admin or (password_check and not password_check(admin)):
        raise InvalidCredentialsError()
    if not admin.matches_secret_key(secret_key):
        logger.warning("Secret key mismatch", extra={"admin_id": str(admin.id)})
        raise InvalidSecretKeyError()
    return admin


class RequestVerificationCodeHandler:
    """Handler for RequestVerificationCodeCommand (login step one and resend)."""

    def __init__(
        self,
        admin_repository: AdminRepository,
        password_hasher: PasswordHasher,
        email_sender: EmailSender,
        code_ttl_seconds: int = DEFAULT_CODE_TTL_SECONDS,
        resend_cooldown_seconds: int = DEFAULT_RESEND_COOLDOWN_SECONDS,
        code_length: int = DEFAULT_CODE_LENGTH,
    ):
        self.admin_repository = admin_repository
        self.password_hasher = password_hasher
        self.email_sender = email_sender
        self.code_ttl = timedelta(seconds=code_ttl_seconds)
        self.code_length = code_length
        self.resend_policy = ResendPolicy(
            ttl=self.code_ttl, cooldown=timedelta(seconds=resend_cooldown_seconds)
        )

    async def handle(self, command: RequestVerificationCodeCommand) -> VerificationCodeSentDTO:
        """
        Handle a code request.

        The code is persisted before the email is attempted. If delivery
        fails the stored code is kept, so a resend can still succeed.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password
            InvalidSecretKeyError: Secret key does not match
            ResendThrottledError: A code was issued within the cooldown
            DeliveryFailedError: The email could not be sent
        """
        admin = await _find_admin_for_login(
            self.admin_repository,
            command.email,
            command.secret_key,
            password_check=lambda found: self.password_hasher.verify(
                command.password, found.password_hash
            ),
        )

        now = datetime.now(timezone.utc)
        self.resend_policy.check(admin, now)

        code = VerificationCodeGenerator.generate(self.code_length)
        expires_at = now + self.code_ttl
        admin = await self.admin_repository.save(admin.issue_verification_code(code, expires_at))

        email = build_verification_email(code, int(self.code_ttl.total_seconds()))
        delivered = await self.email_sender.send(
            str(admin.email), email.subject, email.body, email.html_body
        )
        if not delivered:
            logger.error(
                "Verification code stored but not delivered",
                extra={"admin_id": str(admin.id)},
            )
            raise DeliveryFailedError()

        await event_bus.publish(
            VerificationCodeIssued(
                aggregate_id=str(admin.id),
                admin_id=admin.id,
                expires_at=expires_at,
            )
        )

        return VerificationCodeSentDTO(
            email=str(admin.email),
            expires_at=expires_at,
            resend_available_at=now + self.resend_policy.cooldown,
        )


class VerifyCodeHandler:
    """Handler for VerifyCodeCommand (login step two)."""

    def __init__(self, admin_repository: AdminRepository, session_issuer: SessionIssuer):
        self.admin_repository = admin_repository
        self.session_issuer = session_issuer

    async def handle(self, command: VerifyCodeCommand) -> AuthenticatedSessionDTO:
        """
        Handle a code verification.

        Failures leave the stored code untouched.

        Raises:
            InvalidCredentialsError: Unknown email
            InvalidSecretKeyError: Secret key does not match
            NoCodeRequestedError: No code outstanding
            CodeExpiredError: Code past its expiry
            CodeMismatchError: Wrong code
        """
        admin = await _find_admin_for_login(
            self.admin_repository, command.email, command.secret_key
        )

        now = datetime.now(timezone.utc)
        VerificationCodeValidator.validate(admin, command.code, now)

        # Conditional clear: of two concurrent verifies with one code, only one wins.
        if not await self.admin_repository.consume_verification_code(
            admin.id, admin.verification_code
        ):
            raise NoCodeRequestedError()

        admin = await self.admin_repository.save(admin.complete_login(now, command.ip_address))

        session = self.session_issuer.issue(
            SessionIdentity(admin_id=admin.id, email=str(admin.email), name=admin.name)
        )

        await event_bus.publish(
            AdminAuthenticated(
                aggregate_id=str(admin.id),
                admin_id=admin.id,
                ip_address=command.ip_address,
            )
        )

        return AuthenticatedSessionDTO(
            token=session.token,
            expires_at=session.expires_at,
            admin_id=admin.id,
            email=str(admin.email),
            name=admin.name,
        )
