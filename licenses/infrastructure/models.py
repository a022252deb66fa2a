"""
License model.
"""
import uuid

from django.core.validators import RegexValidator
from django.db import models
from django.utils import timezone

license_key_validator = RegexValidator(
    regex=r"^[A-Z0-9]{5}(-[A-Z0-9]{5}){4}$",
    message="Enter a key of five groups of five uppercase letters or digits, "
    "separated by hyphens.",
)


class License(models.Model):
    """
    A software license key issued to a licensee.

    A null expires_at means the license never expires.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    key = models.CharField(max_length=29, unique=True, validators=[license_key_validator])
    email = models.EmailField(db_index=True)
    domain = models.CharField(
        max_length=255, null=True, blank=True, help_text="Only this domain may verify the key"
    )
    is_active = models.BooleanField(default=True)
    expires_at = models.DateTimeField(null=True, blank=True)
    activated_at = models.DateTimeField(
        null=True, blank=True, help_text="Set by the first successful verification"
    )
    created_by = models.ForeignKey(
        "accounts.Admin",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="licenses",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "licenses"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["is_active", "expires_at"], name="licenses_active_expiry_idx"),
        ]

    def __str__(self):
        return self.key

    @property
    def is_expired(self) -> bool:
        return self.expires_at is not None and self.expires_at < timezone.now()
