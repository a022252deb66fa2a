"""
Public license verification API view.

Third-party sites call this endpoint to check a key. It needs no session.
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.verification.serializers import (
    KEY_REQUIRED_MESSAGE,
    VerifyLicenseRequestSerializer,
    VerifyLicenseResponseSerializer,
)
from core.domain.value_objects import VerificationOutcome
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.application.commands.verify_license import VerifyLicenseCommand
from licenses.application.handlers.verify_license_handler import VerifyLicenseHandler
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository

_license_repo = DjangoLicenseRepository()

tracer = get_tracer(__name__)

OUTCOME_STATUS = {
    VerificationOutcome.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    VerificationOutcome.INACTIVE: status.HTTP_403_FORBIDDEN,
    VerificationOutcome.EXPIRED: status.HTTP_403_FORBIDDEN,
    VerificationOutcome.DOMAIN_MISMATCH: status.HTTP_403_FORBIDDEN,
    VerificationOutcome.VALID: status.HTTP_200_OK,
}


class VerifyLicenseView(APIView):
    """View for public license verification."""

    @extend_schema(
        operation_id="verify_license",
        summary="Verify License",
        description=(
            "Check that a key exists, is active, has not expired and, when the "
            "license is bound to a domain, that the caller's domain matches. The "
            "first successful check records the activation time."
        ),
        tags=["Verification"],
        request=VerifyLicenseRequestSerializer,
        responses={
            200: VerifyLicenseResponseSerializer,
            400: VerifyLicenseResponseSerializer,
            403: VerifyLicenseResponseSerializer,
            404: VerifyLicenseResponseSerializer,
        },
    )
    def post(self, request: Request) -> Response:
        """Verify a license key."""
        return async_to_sync(self._handle_verify_license)(request)

    async def _handle_verify_license(self, request: Request) -> Response:
        """Async handler for verify license."""
        with tracer.start_as_current_span("verify_license") as span:
            span.set_attribute("operation", "verify_license")

            serializer = VerifyLicenseRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_attribute("error", "validation_failed")
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                message = KEY_REQUIRED_MESSAGE if "key" in serializer.errors else "invalid request"
                return Response(
                    {"valid": False, "message": message}, status=status.HTTP_400_BAD_REQUEST
                )

            command = VerifyLicenseCommand(
                key=serializer.validated_data["key"].strip(),
                domain=serializer.validated_data.get("domain") or None,
            )
            result = await VerifyLicenseHandler(license_repository=_license_repo).handle(command)

            span.set_attribute("verification.outcome", result.outcome.value)
            span.set_status(Status(StatusCode.OK))

            payload = {"valid": result.valid, "message": result.message}
            if result.valid:
                payload["expiresAt"] = result.expires_at
            return Response(payload, status=OUTCOME_STATUS[result.outcome])
