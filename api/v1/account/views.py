"""
Admin account API views.

All endpoints act on the admin identified by the session.
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.application.commands.update_profile import (
    SetSetupEnabledCommand,
    UpdateProfileCommand,
)
from accounts.application.handlers.profile_handlers import (
    GetAdminProfileHandler,
    SetSetupEnabledHandler,
    UpdateProfileHandler,
)
from accounts.application.queries.get_admin_profile import GetAdminProfileQuery
from accounts.infrastructure.hashers import DjangoPasswordHasher
from accounts.infrastructure.repositories.django_admin_repository import DjangoAdminRepository
from api.v1.account.serializers import SetupControlSerializer, UpdateProfileRequestSerializer
from api.v1.setup.serializers import AdminProfileResponseSerializer
from core.instrumentation import Status, StatusCode, get_tracer

_admin_repo = DjangoAdminRepository()
_password_hasher = DjangoPasswordHasher()

tracer = get_tracer(__name__)


class ProfileView(APIView):
    """View for reading and updating the admin profile."""

    @extend_schema(
        operation_id="get_admin_profile",
        summary="Get Profile",
        tags=["Admin"],
        responses={
            200: AdminProfileResponseSerializer,
            401: {"description": "Not signed in"},
            404: {"description": "Admin not found"},
        },
    )
    def get(self, request: Request) -> Response:
        """Return the signed-in admin's profile."""
        return async_to_sync(self._handle_get_profile)(request)

    async def _handle_get_profile(self, request: Request) -> Response:
        with tracer.start_as_current_span("get_admin_profile") as span:
            admin_id = request.admin_session.admin_id
            span.set_attribute("admin.id", str(admin_id))

            result = await GetAdminProfileHandler(admin_repository=_admin_repo).handle(
                GetAdminProfileQuery(admin_id=admin_id)
            )

            span.set_status(Status(StatusCode.OK))
            return Response(AdminProfileResponseSerializer(result).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="update_admin_profile",
        summary="Update Profile",
        description=(
            "Update name, username and mobile number. To change the password, send "
            "new_password together with current_password."
        ),
        tags=["Admin"],
        request=UpdateProfileRequestSerializer,
        responses={
            200: AdminProfileResponseSerializer,
            400: {"description": "Bad Request or incorrect current password"},
            401: {"description": "Not signed in"},
            409: {"description": "Username already taken"},
        },
    )
    def patch(self, request: Request) -> Response:
        """Update the signed-in admin's profile."""
        return async_to_sync(self._handle_update_profile)(request)

    async def _handle_update_profile(self, request: Request) -> Response:
        """Async handler for profile updates."""
        with tracer.start_as_current_span("update_admin_profile") as span:
            admin_id = request.admin_session.admin_id
            span.set_attribute("admin.id", str(admin_id))

            serializer = UpdateProfileRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_attribute("error", "validation_failed")
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return Response({"error": serializer.errors}, status=status.HTTP_400_BAD_REQUEST)

            handler = UpdateProfileHandler(
                admin_repository=_admin_repo, password_hasher=_password_hasher
            )
            command = UpdateProfileCommand(admin_id=admin_id, **serializer.validated_data)
            result = await handler.handle(command)

            span.set_status(Status(StatusCode.OK))
            return Response(AdminProfileResponseSerializer(result).data, status=status.HTTP_200_OK)


class SetupControlView(APIView):
    """View for the setup page flag of the signed-in admin."""

    @extend_schema(
        operation_id="get_setup_control",
        summary="Get Setup Control",
        tags=["Admin"],
        responses={200: SetupControlSerializer, 401: {"description": "Not signed in"}},
    )
    def get(self, request: Request) -> Response:
        """Return whether this admin keeps the setup page open."""
        return async_to_sync(self._handle_get)(request)

    async def _handle_get(self, request: Request) -> Response:
        result = await GetAdminProfileHandler(admin_repository=_admin_repo).handle(
            GetAdminProfileQuery(admin_id=request.admin_session.admin_id)
        )
        return Response(
            SetupControlSerializer({"is_setup_enabled": result.is_setup_enabled}).data,
            status=status.HTTP_200_OK,
        )

    @extend_schema(
        operation_id="set_setup_control",
        summary="Set Setup Control",
        description="Open or close the account setup page.",
        tags=["Admin"],
        request=SetupControlSerializer,
        responses={
            200: SetupControlSerializer,
            400: {"description": "Bad Request"},
            401: {"description": "Not signed in"},
        },
    )
    def post(self, request: Request) -> Response:
        """Set whether this admin keeps the setup page open."""
        return async_to_sync(self._handle_set)(request)

    async def _handle_set(self, request: Request) -> Response:
        with tracer.start_as_current_span("set_setup_control") as span:
            admin_id = request.admin_session.admin_id
            span.set_attribute("admin.id", str(admin_id))

            serializer = SetupControlSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return Response({"error": serializer.errors}, status=status.HTTP_400_BAD_REQUEST)

            result = await SetSetupEnabledHandler(admin_repository=_admin_repo).handle(
                SetSetupEnabledCommand(
                    admin_id=admin_id,
                    is_setup_enabled=serializer.validated_data["is_setup_enabled"],
                )
            )

            span.set_attribute("setup.enabled", result.is_setup_enabled)
            span.set_status(Status(StatusCode.OK))
            return Response(
                SetupControlSerializer({"is_setup_enabled": result.is_setup_enabled}).data,
                status=status.HTTP_200_OK,
            )
