"""
Account setup API views.

Setup creates an admin account. It is open while no admin exists, or while
an existing admin has re-enabled it from their profile.
"""

import os
import uuid

from asgiref.sync import async_to_sync, sync_to_async
from django.core.files.storage import default_storage
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.application.commands.create_admin import CreateAdminCommand
from accounts.application.handlers.setup_handlers import CheckSetupAccessHandler, CreateAdminHandler
from accounts.application.queries.check_setup_access import CheckSetupAccessQuery
from accounts.infrastructure.hashers import DjangoPasswordHasher
from accounts.infrastructure.repositories.django_admin_repository import DjangoAdminRepository
from api.utils import get_client_ip
from api.v1.setup.serializers import (
    AdminProfileResponseSerializer,
    CreateAdminRequestSerializer,
    SetupAccessResponseSerializer,
)
from core.domain.exceptions import DomainException
from core.instrumentation import Status, StatusCode, get_tracer

_admin_repo = DjangoAdminRepository()
_password_hasher = DjangoPasswordHasher()

tracer = get_tracer(__name__)

PROFILE_IMAGE_DIR = "profile_images"


def _profile_image_name(upload) -> str:
    _, extension = os.path.splitext(upload.name or "")
    return f"{PROFILE_IMAGE_DIR}/{uuid.uuid4().hex}{extension.lower()}"


class SetupAccessView(APIView):
    """View for the setup gate."""

    @extend_schema(
        operation_id="check_setup_access",
        summary="Check Setup Access",
        description="Whether the account setup page may be used right now.",
        tags=["Setup"],
        responses={200: SetupAccessResponseSerializer},
    )
    def get(self, request: Request) -> Response:
        """Return whether setup is allowed."""
        return async_to_sync(self._handle_check_access)(request)

    async def _handle_check_access(self, request: Request) -> Response:
        with tracer.start_as_current_span("check_setup_access") as span:
            result = await CheckSetupAccessHandler(admin_repository=_admin_repo).handle(
                CheckSetupAccessQuery()
            )
            span.set_attribute("setup.allowed", result.is_allowed)
            span.set_status(Status(StatusCode.OK))
            return Response(SetupAccessResponseSerializer(result).data, status=status.HTTP_200_OK)


class SetupView(APIView):
    """View for creating an admin account."""

    parser_classes = [JSONParser, MultiPartParser, FormParser]

    @extend_schema(
        operation_id="create_admin",
        summary="Create Admin Account",
        description=(
            "Create an admin account. Allowed while no admin exists or while any "
            "admin has setup enabled. Accepts JSON or multipart with an optional "
            "profile_image file."
        ),
        tags=["Setup"],
        request=CreateAdminRequestSerializer,
        responses={
            201: AdminProfileResponseSerializer,
            400: {"description": "Bad Request"},
            403: {"description": "Setup is disabled"},
            409: {"description": "Username or email already registered"},
        },
    )
    def post(self, request: Request) -> Response:
        """Create an admin account."""
        return async_to_sync(self._handle_create_admin)(request)

    async def _handle_create_admin(self, request: Request) -> Response:
        """Async handler for account setup."""
        with tracer.start_as_current_span("create_admin") as span:
            span.set_attribute("operation", "create_admin")

            serializer = CreateAdminRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_attribute("error", "validation_failed")
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return Response({"error": serializer.errors}, status=status.HTTP_400_BAD_REQUEST)

            data = serializer.validated_data
            image_path = None
            upload = data.get("profile_image")
            if upload is not None:
                image_path = await sync_to_async(default_storage.save)(
                    _profile_image_name(upload), upload
                )

            handler = CreateAdminHandler(admin_repository=_admin_repo, password_hasher=_password_hasher)
            command = CreateAdminCommand(
                username=data["username"],
                name=data["name"],
                email=data["email"],
                password=data["password"],
                secret_key=data["secret_key"],
                mobile_number=data.get("mobile_number", ""),
                profile_image=image_path,
                ip_address=get_client_ip(request),
            )

            try:
                result = await handler.handle(command)
            except DomainException:
                if image_path:
                    await sync_to_async(default_storage.delete)(image_path)
                raise

            span.set_attribute("admin.id", str(result.id))
            span.set_status(Status(StatusCode.OK))
            return Response(
                AdminProfileResponseSerializer(result).data, status=status.HTTP_201_CREATED
            )
