"""
Serializers for the signed-in admin's account API.
"""

from rest_framework import serializers


class UpdateProfileRequestSerializer(serializers.Serializer):
    """Serializer for profile updates. All fields are optional."""

    name = serializers.CharField(required=False, max_length=255)
    username = serializers.CharField(required=False, max_length=150)
    mobile_number = serializers.CharField(required=False, allow_blank=True, max_length=32)
    current_password = serializers.CharField(
        required=False, allow_blank=True, trim_whitespace=False, write_only=True
    )
    new_password = serializers.CharField(
        required=False, min_length=8, trim_whitespace=False, write_only=True
    )


class SetupControlSerializer(serializers.Serializer):
    """Serializer for reading and writing the setup page flag."""

    is_setup_enabled = serializers.BooleanField(required=True)
