"""
Django admin configuration for licenses app.
"""
from django.contrib import admin
from django.utils.html import format_html

from licenses.infrastructure.models import License


@admin.register(License)
class LicenseAdmin(admin.ModelAdmin):
    """Admin interface for License model."""

    list_display = [
        "key",
        "email",
        "domain",
        "status_display",
        "expires_at",
        "activated_at",
        "created_by",
        "created_at",
    ]
    list_filter = ["is_active", "expires_at", "created_at"]
    search_fields = ["key", "email", "domain", "created_by__name"]
    readonly_fields = ["id", "activated_at", "created_by", "created_at", "updated_at"]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "key", "email", "domain", "is_active"),
            },
        ),
        (
            "Validity",
            {
                "fields": ("expires_at", "activated_at"),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_by", "created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )

    def status_display(self, obj):
        """Display status with color coding."""
        if not obj.is_active:
            color, label = "orange", "inactive"
        elif obj.is_expired:
            color, label = "gray", "expired"
        else:
            color, label = "green", "active"
        return format_html(
            '<span style="color: {}; font-weight: bold;">{}</span>',
            color,
            label.upper(),
        )

    status_display.short_description = "Status"

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("created_by")
