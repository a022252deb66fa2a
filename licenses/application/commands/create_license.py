"""
CreateLicenseCommand.

Command to issue a new license key.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class CreateLicenseCommand:
    """Command to create a license; a key is generated when none is given."""

    email: str
    key: Optional[str] = None
    domain: Optional[str] = None
    expires_at: Optional[datetime] = None
    created_by_id: Optional[uuid.UUID] = None
