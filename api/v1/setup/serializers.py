"""
Serializers for the account setup API.
"""

from rest_framework import serializers


class SetupAccessResponseSerializer(serializers.Serializer):
    """Serializer for the setup gate."""

    is_allowed = serializers.BooleanField()


class CreateAdminRequestSerializer(serializers.Serializer):
    """Serializer for account setup. Accepts JSON or multipart form data."""

    username = serializers.CharField(required=True, max_length=150)
    name = serializers.CharField(required=True, max_length=255)
    email = serializers.EmailField(required=True)
    password = serializers.CharField(required=True, min_length=8, trim_whitespace=False, write_only=True)
    secret_key = serializers.CharField(required=True, trim_whitespace=False, write_only=True)
    mobile_number = serializers.CharField(required=False, allow_blank=True, max_length=32, default="")
    profile_image = serializers.FileField(required=False, allow_null=True, write_only=True)

    def validate_profile_image(self, value):
        if value is None:
            return value
        content_type = getattr(value, "content_type", "") or ""
        if not content_type.startswith("image/"):
            raise serializers.ValidationError("Profile image must be an image file.")
        return value


class AdminProfileResponseSerializer(serializers.Serializer):
    """Serializer for AdminProfileDTO. Credentials are never part of it."""

    id = serializers.UUIDField()
    username = serializers.CharField()
    name = serializers.CharField()
    email = serializers.EmailField()
    mobile_number = serializers.CharField(allow_blank=True)
    profile_image = serializers.CharField(allow_null=True)
    last_known_ip = serializers.CharField(allow_null=True)
    last_login_at = serializers.DateTimeField(allow_null=True)
    is_setup_enabled = serializers.BooleanField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()
