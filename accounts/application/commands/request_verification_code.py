"""
RequestVerificationCodeCommand.

First login step: check primary credentials and email a one-time code.
Also used for resends.
"""
from dataclasses import dataclass


@dataclass
class RequestVerificationCodeCommand:
    """Command to issue and email a one-time login code."""

    email: str
    password: str
    secret_key: str
