"""
License key generation and format rules.

Keys are five groups of five uppercase letters or digits joined by hyphens,
e.g. ``AB12C-3D4E5-F6G7H-8J9K0-L1M2N``.
"""

import secrets
import string

from core.domain.exceptions import InvalidLicenseKeyFormatError
from core.domain.value_objects import LicenseKeyValue

KEY_ALPHABET = string.ascii_uppercase + string.digits
KEY_GROUPS = 5
KEY_GROUP_SIZE = 5


def generate_license_key() -> str:
    """
    Generate a random license key in the canonical format.

    Returns:
        Generated license key string
    """
    parts = [
        "".join(secrets.choice(KEY_ALPHABET) for _ in range(KEY_GROUP_SIZE))
        for _ in range(KEY_GROUPS)
    ]
    return "-".join(parts)


def validate_license_key(key: str) -> str:
    """
    Check a caller-supplied key against the canonical format.

    Raises:
        InvalidLicenseKeyFormatError: Key does not match the format
    """
    try:
        return LicenseKeyValue(key).value
    except ValueError as exc:
        raise InvalidLicenseKeyFormatError() from exc
