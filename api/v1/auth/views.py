"""
Admin login API views.

Login is two steps: request-code checks the password and secret key and
emails a one-time code, verify-code exchanges that code for a session. The
session token is returned in the body and also set as an HttpOnly cookie.
"""

from asgiref.sync import async_to_sync
from django.conf import settings
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.application.commands.request_verification_code import (
    RequestVerificationCodeCommand,
)
from accounts.application.commands.verify_code import VerifyCodeCommand
from accounts.application.handlers.authentication_handlers import (
    RequestVerificationCodeHandler,
    VerifyCodeHandler,
)
from accounts.infrastructure.email import DjangoEmailSender
from accounts.infrastructure.hashers import DjangoPasswordHasher
from accounts.infrastructure.repositories.django_admin_repository import DjangoAdminRepository
from accounts.infrastructure.sessions import SignedTokenSessionIssuer
from api.utils import get_client_ip
from api.v1.auth.serializers import (
    AuthenticatedSessionResponseSerializer,
    RequestCodeRequestSerializer,
    SessionIdentityResponseSerializer,
    VerificationCodeSentResponseSerializer,
    VerifyCodeRequestSerializer,
)
from core.instrumentation import Status, StatusCode, get_tracer

# Initialize adapters (in production, use DI container)
_admin_repo = DjangoAdminRepository()
_password_hasher = DjangoPasswordHasher()
_email_sender = DjangoEmailSender()
_session_issuer = SignedTokenSessionIssuer()

tracer = get_tracer(__name__)


def _request_code_handler() -> RequestVerificationCodeHandler:
    return RequestVerificationCodeHandler(
        admin_repository=_admin_repo,
        password_hasher=_password_hasher,
        email_sender=_email_sender,
        code_ttl_seconds=settings.OTP_EXPIRY_SECONDS,
        resend_cooldown_seconds=settings.OTP_RESEND_COOLDOWN_SECONDS,
        code_length=settings.OTP_CODE_LENGTH,
    )


class RequestCodeView(APIView):
    """View for login step one: email a one-time code."""

    operation = "request_verification_code"
    success_message = "Verification code sent"

    @extend_schema(
        operation_id="request_verification_code",
        summary="Request Login Code",
        description=(
            "Check email, password and secret key, then email an 8-digit one-time "
            "code valid for 5 minutes."
        ),
        tags=["Auth"],
        request=RequestCodeRequestSerializer,
        responses={
            200: VerificationCodeSentResponseSerializer,
            400: {"description": "Bad Request"},
            401: {"description": "Invalid credentials or secret key"},
            429: {"description": "A code was sent recently"},
            503: {"description": "Email delivery failed"},
        },
    )
    def post(self, request: Request) -> Response:
        """Issue and email a one-time login code."""
        return async_to_sync(self._handle_request_code)(request)

    async def _handle_request_code(self, request: Request) -> Response:
        """Async handler for code requests."""
        with tracer.start_as_current_span(self.operation) as span:
            span.set_attribute("operation", self.operation)

            serializer = RequestCodeRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_attribute("error", "validation_failed")
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return Response({"error": serializer.errors}, status=status.HTTP_400_BAD_REQUEST)

            command = RequestVerificationCodeCommand(
                email=serializer.validated_data["email"],
                password=serializer.validated_data["password"],
                secret_key=serializer.validated_data["secret_key"],
            )
            result = await _request_code_handler().handle(command)

            span.set_status(Status(StatusCode.OK))
            response_serializer = VerificationCodeSentResponseSerializer(
                {
                    "message": self.success_message,
                    "email": result.email,
                    "expires_at": result.expires_at,
                    "resend_available_at": result.resend_available_at,
                }
            )
            return Response(response_serializer.data, status=status.HTTP_200_OK)


class ResendCodeView(RequestCodeView):
    """View for resending the one-time code. Same checks and throttle as step one."""

    operation = "resend_verification_code"
    success_message = "Verification code resent"

    @extend_schema(
        operation_id="resend_verification_code",
        summary="Resend Login Code",
        description="Issue a fresh one-time code, replacing the previous one.",
        tags=["Auth"],
        request=RequestCodeRequestSerializer,
        responses={
            200: VerificationCodeSentResponseSerializer,
            400: {"description": "Bad Request"},
            401: {"description": "Invalid credentials or secret key"},
            429: {"description": "A code was sent recently"},
            503: {"description": "Email delivery failed"},
        },
    )
    def post(self, request: Request) -> Response:
        """Resend a one-time login code."""
        return async_to_sync(self._handle_request_code)(request)


class VerifyCodeView(APIView):
    """View for login step two: exchange the code for a session."""

    @extend_schema(
        operation_id="verify_code",
        summary="Verify Login Code",
        description=(
            "Exchange the emailed code for an admin session valid for 24 hours. "
            "The token is returned and also set as an HttpOnly cookie."
        ),
        tags=["Auth"],
        request=VerifyCodeRequestSerializer,
        responses={
            200: AuthenticatedSessionResponseSerializer,
            400: {"description": "No code requested, code expired, or code mismatch"},
            401: {"description": "Invalid credentials or secret key"},
        },
    )
    def post(self, request: Request) -> Response:
        """Complete login."""
        return async_to_sync(self._handle_verify_code)(request)

    async def _handle_verify_code(self, request: Request) -> Response:
        """Async handler for verify code."""
        with tracer.start_as_current_span("verify_code") as span:
            span.set_attribute("operation", "verify_code")

            serializer = VerifyCodeRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_attribute("error", "validation_failed")
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return Response({"error": serializer.errors}, status=status.HTTP_400_BAD_REQUEST)

            handler = VerifyCodeHandler(admin_repository=_admin_repo, session_issuer=_session_issuer)
            command = VerifyCodeCommand(
                email=serializer.validated_data["email"],
                code=serializer.validated_data["code"],
                secret_key=serializer.validated_data["secret_key"],
                ip_address=get_client_ip(request),
            )
            result = await handler.handle(command)

            span.set_attribute("admin.id", str(result.admin_id))
            span.set_status(Status(StatusCode.OK))

            response = Response(
                AuthenticatedSessionResponseSerializer(result).data, status=status.HTTP_200_OK
            )
            response.set_cookie(
                settings.ADMIN_SESSION_COOKIE_NAME,
                result.token,
                max_age=settings.ADMIN_SESSION_MAX_AGE,
                httponly=True,
                samesite="Strict",
                secure=settings.ADMIN_SESSION_COOKIE_SECURE,
            )
            return response


class LogoutView(APIView):
    """View for signing out."""

    @extend_schema(
        operation_id="logout",
        summary="Logout",
        description=(
            "Clear the session cookie. Sessions are stateless signed tokens, so a "
            "bearer token stays valid until it expires."
        ),
        tags=["Auth"],
        request=None,
        responses={200: {"description": "Logged out"}},
    )
    def post(self, request: Request) -> Response:
        """Clear the session cookie."""
        response = Response({"message": "Logged out"}, status=status.HTTP_200_OK)
        response.delete_cookie(settings.ADMIN_SESSION_COOKIE_NAME, samesite="Strict")
        return response


class SessionView(APIView):
    """View for the current admin session."""

    @extend_schema(
        operation_id="get_session",
        summary="Current Session",
        description="Return the identity and expiry of the current admin session.",
        tags=["Auth"],
        responses={
            200: SessionIdentityResponseSerializer,
            401: {"description": "Not signed in"},
        },
    )
    def get(self, request: Request) -> Response:
        """Return the session identity resolved by the middleware."""
        identity = request.admin_session
        return Response(SessionIdentityResponseSerializer(identity).data, status=status.HTTP_200_OK)
