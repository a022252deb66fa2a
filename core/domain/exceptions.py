"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions.
"""
from typing import Optional


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class AuthenticationException(DomainException):
    """Base exception for the admin login flow."""

    pass


class UnauthorizedError(AuthenticationException):
    """Raised when a request carries no valid admin session."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="UNAUTHORIZED")


class InvalidCredentialsError(AuthenticationException):
    """Raised when the email is unknown or the password does not match."""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message, code="INVALID_CREDENTIALS")


class InvalidSecretKeyError(AuthenticationException):
    """Raised when the admin secret key does not match."""

    def __init__(self, message: str = "Invalid secret key"):
        super().__init__(message, code="INVALID_SECRET_KEY")


class NoCodeRequestedError(AuthenticationException):
    """Raised when verifying without an outstanding one-time code."""

    def __init__(self, message: str = "No verification code requested"):
        super().__init__(message, code="NO_CODE_REQUESTED")


class CodeExpiredError(AuthenticationException):
    """Raised when the one-time code is past its expiry."""

    def __init__(self, message: str = "Verification code has expired"):
        super().__init__(message, code="CODE_EXPIRED")


class CodeMismatchError(AuthenticationException):
    """Raised when the submitted one-time code is wrong."""

    def __init__(self, message: str = "Invalid verification code"):
        super().__init__(message, code="CODE_MISMATCH")


class ResendThrottledError(AuthenticationException):
    """Raised when a new code is requested too soon after the last one."""

    def __init__(
        self,
        message: str = "A verification code was sent recently, please wait before requesting another",
        retry_after: Optional[int] = None,
    ):
        super().__init__(message, code="RESEND_THROTTLED")
        self.retry_after = retry_after


class DeliveryFailedError(AuthenticationException):
    """Raised when the verification email could not be sent."""

    def __init__(self, message: str = "Failed to send verification code"):
        super().__init__(message, code="DELIVERY_FAILED")


class AdminException(DomainException):
    """Base exception for admin account errors."""

    pass


class AdminNotFoundError(AdminException):
    """Raised when an admin account is not found."""

    def __init__(self, message: str = "Admin not found"):
        super().__init__(message, code="ADMIN_NOT_FOUND")


class UsernameTakenError(AdminException):
    """Raised when a username belongs to another admin."""

    def __init__(self, message: str = "Username is already taken"):
        super().__init__(message, code="USERNAME_TAKEN")


class EmailTakenError(AdminException):
    """Raised when an email belongs to another admin."""

    def __init__(self, message: str = "Email is already registered"):
        super().__init__(message, code="EMAIL_TAKEN")


class IncorrectPasswordError(AdminException):
    """Raised when the current password check fails on a password change."""

    def __init__(self, message: str = "Current password is incorrect"):
        super().__init__(message, code="INCORRECT_PASSWORD")


class SetupDisabledError(AdminException):
    """Raised when account setup is attempted while the setup gate is closed."""

    def __init__(self, message: str = "Setup is disabled"):
        super().__init__(message, code="SETUP_DISABLED")


class LicenseException(DomainException):
    """Base exception for license-related errors."""

    pass


class LicenseNotFoundError(LicenseException):
    """Raised when a license is not found."""

    def __init__(self, message: str = "License not found"):
        super().__init__(message, code="LICENSE_NOT_FOUND")


class DuplicateLicenseKeyError(LicenseException):
    """Raised when a license key is already in use."""

    def __init__(self, message: str = "License key already exists"):
        super().__init__(message, code="DUPLICATE_KEY")


class InvalidLicenseKeyFormatError(LicenseException):
    """Raised when a license key is not five groups of five characters."""

    def __init__(
        self,
        message: str = "License key must be five groups of five uppercase letters or digits "
        "separated by hyphens",
    ):
        super().__init__(message, code="INVALID_LICENSE_KEY_FORMAT")


class MissingExpiryError(LicenseException):
    """Raised when extending a license without a new expiry."""

    def __init__(self, message: str = "New expiration date is required"):
        super().__init__(message, code="MISSING_EXPIRY")
