"""
VerifyLicenseCommand.

Public check used by third-party software. A command rather than a query
because a first successful check stamps the activation time.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class VerifyLicenseCommand:
    """Command to verify a license key, optionally for a domain."""

    key: str
    domain: Optional[str] = None
