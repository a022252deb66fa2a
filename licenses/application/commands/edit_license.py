"""
EditLicenseCommand.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class EditLicenseCommand:
    """Command to overwrite a license's key, email and expiry."""

    license_id: uuid.UUID
    key: str
    email: str
    expires_at: Optional[datetime] = None
