"""
GetAdminProfileQuery.
"""
import uuid
from dataclasses import dataclass


@dataclass
class GetAdminProfileQuery:
    """Query for the signed-in admin's profile."""

    admin_id: uuid.UUID
