"""
VerifyCodeCommand.

Second login step: exchange the emailed code for a session.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class VerifyCodeCommand:
    """Command to verify a one-time login code."""

    email: str
    code: str
    secret_key: str
    ip_address: Optional[str] = None
