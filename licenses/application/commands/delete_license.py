"""
DeleteLicenseCommand.
"""
import uuid
from dataclasses import dataclass


@dataclass
class DeleteLicenseCommand:
    """Command to hard-delete a license."""

    license_id: uuid.UUID
