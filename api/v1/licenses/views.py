"""
License management API views.

These endpoints require an admin session (enforced by AdminSessionMiddleware)
and are used by the admin dashboard to:
- List and create licenses
- Edit, extend and delete licenses
- Generate keys in the canonical format
"""

import uuid

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.licenses.serializers import (
    CreateLicenseRequestSerializer,
    EditLicenseRequestSerializer,
    ExtendLicenseRequestSerializer,
    GeneratedKeyResponseSerializer,
    LicenseResponseSerializer,
)
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.application.commands.create_license import CreateLicenseCommand
from licenses.application.commands.delete_license import DeleteLicenseCommand
from licenses.application.commands.edit_license import EditLicenseCommand
from licenses.application.commands.extend_license import ExtendLicenseCommand
from licenses.application.handlers.license_lifecycle_handlers import (
    CreateLicenseHandler,
    DeleteLicenseHandler,
    EditLicenseHandler,
    ExtendLicenseHandler,
)
from licenses.application.handlers.list_licenses_handler import ListLicensesHandler
from licenses.application.queries.list_licenses import ListLicensesQuery
from licenses.domain.services import LicenseKeyGenerator
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository

# Initialize repositories (in production, use DI container)
_license_repo = DjangoLicenseRepository()

tracer = get_tracer(__name__)


class LicenseListView(APIView):
    """View for listing and creating licenses."""

    @extend_schema(
        operation_id="list_licenses",
        summary="List Licenses",
        description="All licenses, newest first, with the creating admin's name and email.",
        tags=["Licenses"],
        responses={
            200: LicenseResponseSerializer(many=True),
            401: {"description": "Not signed in"},
        },
    )
    def get(self, request: Request) -> Response:
        """List licenses."""
        return async_to_sync(self._handle_list_licenses)(request)

    async def _handle_list_licenses(self, request: Request) -> Response:
        with tracer.start_as_current_span("list_licenses") as span:
            result = await ListLicensesHandler(license_repository=_license_repo).handle(
                ListLicensesQuery()
            )
            span.set_attribute("licenses.count", len(result))
            span.set_status(Status(StatusCode.OK))
            return Response(
                LicenseResponseSerializer(result, many=True).data, status=status.HTTP_200_OK
            )

    @extend_schema(
        operation_id="create_license",
        summary="Create License",
        description=(
            "Create an active license. When key is omitted a key is generated. "
            "An optional domain restricts which site may verify the key."
        ),
        tags=["Licenses"],
        request=CreateLicenseRequestSerializer,
        responses={
            201: LicenseResponseSerializer,
            400: {"description": "Bad Request or invalid key format"},
            401: {"description": "Not signed in"},
            409: {"description": "License key already exists"},
        },
    )
    def post(self, request: Request) -> Response:
        """Create a license."""
        return async_to_sync(self._handle_create_license)(request)

    async def _handle_create_license(self, request: Request) -> Response:
        """Async handler for create license."""
        with tracer.start_as_current_span("create_license") as span:
            span.set_attribute("operation", "create_license")

            serializer = CreateLicenseRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_attribute("error", "validation_failed")
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return Response({"error": serializer.errors}, status=status.HTTP_400_BAD_REQUEST)

            data = serializer.validated_data
            command = CreateLicenseCommand(
                email=data["email"],
                key=data.get("key") or None,
                domain=data.get("domain") or None,
                expires_at=data.get("expires_at"),
                created_by_id=request.admin_session.admin_id,
            )
            result = await CreateLicenseHandler(license_repository=_license_repo).handle(command)

            span.set_attribute("license.id", str(result.id))
            span.set_status(Status(StatusCode.OK))
            return Response(LicenseResponseSerializer(result).data, status=status.HTTP_201_CREATED)


class GenerateLicenseKeyView(APIView):
    """View for generating a license key."""

    @extend_schema(
        operation_id="generate_license_key",
        summary="Generate License Key",
        description="Return a random key in the canonical XXXXX-XXXXX-XXXXX-XXXXX-XXXXX format.",
        tags=["Licenses"],
        responses={200: GeneratedKeyResponseSerializer, 401: {"description": "Not signed in"}},
    )
    def get(self, request: Request) -> Response:
        """Generate a key. Nothing is stored."""
        return Response(
            GeneratedKeyResponseSerializer({"key": LicenseKeyGenerator.generate()}).data,
            status=status.HTTP_200_OK,
        )


class LicenseDetailView(APIView):
    """View for editing and deleting a license."""

    @extend_schema(
        operation_id="edit_license",
        summary="Edit License",
        description="Overwrite key, email and expiry. Does not change active state or activation.",
        tags=["Licenses"],
        request=EditLicenseRequestSerializer,
        responses={
            200: LicenseResponseSerializer,
            400: {"description": "Bad Request or invalid key format"},
            401: {"description": "Not signed in"},
            404: {"description": "License not found"},
            409: {"description": "License key already exists"},
        },
    )
    def patch(self, request: Request, license_id: uuid.UUID) -> Response:
        """Edit a license."""
        return async_to_sync(self._handle_edit_license)(request, license_id)

    async def _handle_edit_license(self, request: Request, license_id: uuid.UUID) -> Response:
        """Async handler for edit license."""
        with tracer.start_as_current_span("edit_license") as span:
            span.set_attribute("license.id", str(license_id))

            serializer = EditLicenseRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_attribute("error", "validation_failed")
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return Response({"error": serializer.errors}, status=status.HTTP_400_BAD_REQUEST)

            command = EditLicenseCommand(
                license_id=license_id,
                key=serializer.validated_data["key"],
                email=serializer.validated_data["email"],
                expires_at=serializer.validated_data["expires_at"],
            )
            result = await EditLicenseHandler(license_repository=_license_repo).handle(command)

            span.set_status(Status(StatusCode.OK))
            return Response(LicenseResponseSerializer(result).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="delete_license",
        summary="Delete License",
        description="Permanently delete a license.",
        tags=["Licenses"],
        responses={
            204: None,
            401: {"description": "Not signed in"},
            404: {"description": "License not found"},
        },
    )
    def delete(self, request: Request, license_id: uuid.UUID) -> Response:
        """Delete a license."""
        return async_to_sync(self._handle_delete_license)(request, license_id)

    async def _handle_delete_license(self, request: Request, license_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("delete_license") as span:
            span.set_attribute("license.id", str(license_id))
            await DeleteLicenseHandler(license_repository=_license_repo).handle(
                DeleteLicenseCommand(license_id=license_id)
            )
            span.set_status(Status(StatusCode.OK))
            return Response(status=status.HTTP_204_NO_CONTENT)


class ExtendLicenseView(APIView):
    """View for extending a license."""

    @extend_schema(
        operation_id="extend_license",
        summary="Extend License",
        description="Set a new expiry and re-activate the license.",
        tags=["Licenses"],
        request=ExtendLicenseRequestSerializer,
        responses={
            200: LicenseResponseSerializer,
            400: {"description": "New expiry missing"},
            401: {"description": "Not signed in"},
            404: {"description": "License not found"},
        },
    )
    def patch(self, request: Request, license_id: uuid.UUID) -> Response:
        """Extend a license."""
        return async_to_sync(self._handle_extend_license)(request, license_id)

    async def _handle_extend_license(self, request: Request, license_id: uuid.UUID) -> Response:
        """Async handler for extend license."""
        with tracer.start_as_current_span("extend_license") as span:
            span.set_attribute("license.id", str(license_id))

            serializer = ExtendLicenseRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_attribute("error", "validation_failed")
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return Response({"error": serializer.errors}, status=status.HTTP_400_BAD_REQUEST)

            command = ExtendLicenseCommand(
                license_id=license_id,
                expires_at=serializer.validated_data["expires_at"],
            )
            result = await ExtendLicenseHandler(license_repository=_license_repo).handle(command)

            span.set_attribute("license.expires_at", result.expires_at.isoformat())
            span.set_status(Status(StatusCode.OK))
            return Response(LicenseResponseSerializer(result).data, status=status.HTTP_200_OK)
