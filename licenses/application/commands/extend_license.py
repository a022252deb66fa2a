"""
ExtendLicenseCommand.

Command to give a license a new expiry. Extending also re-enables it.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class ExtendLicenseCommand:
    """Command to extend a license."""

    license_id: uuid.UUID
    expires_at: Optional[datetime]
