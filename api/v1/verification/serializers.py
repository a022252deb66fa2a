"""
Serializers for the public license verification API.

Field names are part of the public contract, including camelCase expiresAt.
"""

from rest_framework import serializers

KEY_REQUIRED_MESSAGE = "license key is required"


class VerifyLicenseRequestSerializer(serializers.Serializer):
    """Serializer for a verification request."""

    key = serializers.CharField(
        required=True,
        max_length=64,
        error_messages={
            "required": KEY_REQUIRED_MESSAGE,
            "blank": KEY_REQUIRED_MESSAGE,
            "null": KEY_REQUIRED_MESSAGE,
        },
    )
    domain = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=255)


class VerifyLicenseResponseSerializer(serializers.Serializer):
    """Serializer for a verification result. expiresAt is present only when valid."""

    valid = serializers.BooleanField()
    message = serializers.CharField()
    expiresAt = serializers.DateTimeField(allow_null=True, required=False)  # noqa: N815
