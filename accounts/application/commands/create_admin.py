"""
CreateAdminCommand.

Command for the account setup page.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class CreateAdminCommand:
    """Command to create an admin account through setup."""

    username: str
    name: str
    email: str
    password: str
    secret_key: str
    mobile_number: str = ""
    profile_image: Optional[str] = None
    ip_address: Optional[str] = None
