"""
Admin account model.
"""
import uuid

from django.db import models
from django.db.models import Q


class Admin(models.Model):
    """
    Operator account for the license dashboard.

    The one-time login code lives on this row between the two login steps.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    username = models.CharField(max_length=150, unique=True)
    name = models.CharField(max_length=255)
    email = models.EmailField(max_length=254, unique=True)
    password_hash = models.CharField(max_length=255)
    secret_key = models.CharField(max_length=255, help_text="Shared secret required at login")
    mobile_number = models.CharField(max_length=32, blank=True, default="")
    profile_image = models.CharField(max_length=255, null=True, blank=True)
    last_known_ip = models.CharField(max_length=45, null=True, blank=True)
    last_login_at = models.DateTimeField(null=True, blank=True)
    verification_code = models.CharField(max_length=16, null=True, blank=True)
    verification_expires_at = models.DateTimeField(null=True, blank=True)
    is_setup_enabled = models.BooleanField(
        default=False, help_text="Keep the account setup page reachable"
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "admins"
        ordering = ["created_at"]
        constraints = [
            models.CheckConstraint(
                condition=(
                    Q(verification_code__isnull=True, verification_expires_at__isnull=True)
                    | Q(verification_code__isnull=False, verification_expires_at__isnull=False)
                ),
                name="admins_verification_code_pair",
            ),
        ]

    def __str__(self):
        return f"{self.name} <{self.email}>"
