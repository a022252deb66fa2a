"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
import re
from abc import ABC
from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.

    Value objects are immutable and compared by value.
    """

    def __eq__(self, other):
        """Compare value objects by their attributes."""
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self):
        """Make value objects hashable."""
        return hash(tuple(sorted(self.__dict__.items())))


@dataclass(frozen=True)
class Email(ValueObject):
    """Email value object with validation."""

    value: str

    def __post_init__(self):
        """Validate email format."""
        if not self.value or "@" not in self.value:
            raise ValueError(f"Invalid email address: {self.value}")

    def __str__(self) -> str:
        """Return email as string."""
        return self.value


LICENSE_KEY_PATTERN = re.compile(r"^[A-Z0-9]{5}(-[A-Z0-9]{5}){4}$")


@dataclass(frozen=True)
class LicenseKeyValue(ValueObject):
    """License key in the XXXXX-XXXXX-XXXXX-XXXXX-XXXXX format."""

    value: str

    def __post_init__(self):
        if not self.value or not LICENSE_KEY_PATTERN.match(self.value):
            raise ValueError(f"Invalid license key format: {self.value}")

    def __str__(self) -> str:
        return self.value


class VerificationOutcome(Enum):
    """Result of a public license verification, in check order."""

    NOT_FOUND = "not_found"
    INACTIVE = "inactive"
    EXPIRED = "expired"
    DOMAIN_MISMATCH = "domain_mismatch"
    VALID = "valid"

    @property
    def is_valid(self) -> bool:
        return self is VerificationOutcome.VALID

    @property
    def message(self) -> str:
        """Message returned to third-party callers; part of the public contract."""
        return _OUTCOME_MESSAGES[self]

    def __str__(self) -> str:
        return self.value


_OUTCOME_MESSAGES = {
    VerificationOutcome.NOT_FOUND: "license key not found",
    VerificationOutcome.INACTIVE: "license inactive",
    VerificationOutcome.EXPIRED: "license expired",
    VerificationOutcome.DOMAIN_MISMATCH: "domain mismatch",
    VerificationOutcome.VALID: "license valid",
}
