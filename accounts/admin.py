"""
Django admin configuration for accounts app.

Credential fields (password hash, secret key, one-time code) are never shown.
"""
from django.contrib import admin

from accounts.infrastructure.models import Admin


@admin.register(Admin)
class AdminAccountAdmin(admin.ModelAdmin):
    """Admin interface for Admin accounts."""

    list_display = [
        "username",
        "name",
        "email",
        "is_setup_enabled",
        "last_login_at",
        "last_known_ip",
        "created_at",
    ]
    list_filter = ["is_setup_enabled", "created_at"]
    search_fields = ["username", "name", "email"]
    exclude = ["password_hash", "secret_key", "verification_code"]
    readonly_fields = [
        "id",
        "last_login_at",
        "last_known_ip",
        "verification_expires_at",
        "created_at",
        "updated_at",
    ]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "username", "name", "email", "mobile_number", "profile_image"),
            },
        ),
        (
            "Access",
            {
                "fields": (
                    "is_setup_enabled",
                    "last_login_at",
                    "last_known_ip",
                    "verification_expires_at",
                ),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )

    def has_add_permission(self, request):
        """Accounts are created through the setup flow."""
        return False
