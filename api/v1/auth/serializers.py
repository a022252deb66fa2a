"""
Serializers for the admin login API.
"""

from rest_framework import serializers


class RequestCodeRequestSerializer(serializers.Serializer):
    """Serializer for the first login step and for resends."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(required=True, trim_whitespace=False, write_only=True)
    secret_key = serializers.CharField(required=True, trim_whitespace=False, write_only=True)


class VerificationCodeSentResponseSerializer(serializers.Serializer):
    """Serializer for the code-sent response. The code itself is never returned."""

    message = serializers.CharField()
    email = serializers.EmailField()
    expires_at = serializers.DateTimeField()
    resend_available_at = serializers.DateTimeField()


class VerifyCodeRequestSerializer(serializers.Serializer):
    """Serializer for the second login step."""

    email = serializers.EmailField(required=True)
    code = serializers.CharField(required=True, max_length=16)
    secret_key = serializers.CharField(required=True, trim_whitespace=False, write_only=True)


class AuthenticatedSessionResponseSerializer(serializers.Serializer):
    """Serializer for a completed login."""

    token = serializers.CharField()
    expires_at = serializers.DateTimeField()
    admin_id = serializers.UUIDField()
    email = serializers.EmailField()
    name = serializers.CharField()


class SessionIdentityResponseSerializer(serializers.Serializer):
    """Serializer for the current session."""

    admin_id = serializers.UUIDField()
    email = serializers.EmailField()
    name = serializers.CharField()
    issued_at = serializers.DateTimeField(allow_null=True)
    expires_at = serializers.DateTimeField(allow_null=True)
