"""
Profile commands.
"""
import uuid
from dataclasses import dataclass
from typing import Optional


@dataclass
class UpdateProfileCommand:
    """Command to update the signed-in admin's profile and, optionally, password."""

    admin_id: uuid.UUID
    name: Optional[str] = None
    username: Optional[str] = None
    mobile_number: Optional[str] = None
    current_password: Optional[str] = None
    new_password: Optional[str] = None


@dataclass
class SetSetupEnabledCommand:
    """Command to open or close the account setup page."""

    admin_id: uuid.UUID
    is_setup_enabled: bool
