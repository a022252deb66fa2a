"""
Serializers for the license management API.
"""

from rest_framework import serializers


class CreateLicenseRequestSerializer(serializers.Serializer):
    """Serializer for creating a license. A key is generated when none is given."""

    key = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=64)
    email = serializers.EmailField(required=True)
    domain = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=255)
    expires_at = serializers.DateTimeField(required=False, allow_null=True)


class EditLicenseRequestSerializer(serializers.Serializer):
    """Serializer for editing a license. expires_at must be sent; null means no expiry."""

    key = serializers.CharField(required=True, max_length=64)
    email = serializers.EmailField(required=True)
    expires_at = serializers.DateTimeField(required=True, allow_null=True)


class ExtendLicenseRequestSerializer(serializers.Serializer):
    """Serializer for extending a license."""

    expires_at = serializers.DateTimeField(required=False, allow_null=True, default=None)


class LicenseResponseSerializer(serializers.Serializer):
    """Serializer for LicenseDTO."""

    id = serializers.UUIDField()
    key = serializers.CharField()
    email = serializers.EmailField()
    domain = serializers.CharField(allow_null=True)
    is_active = serializers.BooleanField()
    is_expired = serializers.BooleanField()
    expires_at = serializers.DateTimeField(allow_null=True)
    activated_at = serializers.DateTimeField(allow_null=True)
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()
    created_by_name = serializers.CharField(allow_null=True)
    created_by_email = serializers.EmailField(allow_null=True)


class GeneratedKeyResponseSerializer(serializers.Serializer):
    """Serializer for a freshly generated key."""

    key = serializers.CharField()
