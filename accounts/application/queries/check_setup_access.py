"""
CheckSetupAccessQuery.
"""
from dataclasses import dataclass


@dataclass
class CheckSetupAccessQuery:
    """Query whether the account setup page may be used."""
