"""
Unit tests for core value objects.
"""
import pytest

from core.domain.value_objects import Email, LicenseKeyValue, VerificationOutcome


class TestEmail:
    """Tests for Email value object."""

    def test_valid_email(self):
        """Test valid email creation."""
        email = Email("test@example.com")
        assert str(email) == "test@example.com"
        assert email.value == "test@example.com"

    def test_invalid_email_no_at(self):
        """Test invalid email without @."""
        with pytest.raises(ValueError, match="Invalid email"):
            Email("invalid-email")

    def test_invalid_email_empty(self):
        """Test invalid empty email."""
        with pytest.raises(ValueError, match="Invalid email"):
            Email("")


class TestLicenseKeyValue:
    """Tests for LicenseKeyValue value object."""

    def test_valid_key(self):
        """Test canonical key is accepted."""
        key = LicenseKeyValue("AB12C-3D4E5-F6G7H-8J9K0-L1M2N")
        assert str(key) == "AB12C-3D4E5-F6G7H-8J9K0-L1M2N"

    @pytest.mark.parametrize(
        "raw",
        [
            "",
            "ab12c-3d4e5-f6g7h-8j9k0-l1m2n",
            "AB12C-3D4E5-F6G7H-8J9K0",
            "AB12C3D4E5F6G7H8J9K0L1M2N",
            "AB12C-3D4E5-F6G7H-8J9K0-L1M2N-",
            "AB12C-3D4E5-F6G7H-8J9K0-L1M2!",
        ],
    )
    def test_invalid_keys(self, raw):
        """Test malformed keys are rejected."""
        with pytest.raises(ValueError, match="Invalid license key format"):
            LicenseKeyValue(raw)


class TestVerificationOutcome:
    """Tests for VerificationOutcome messages."""

    def test_messages_are_stable(self):
        """Test the public messages for each outcome."""
        assert VerificationOutcome.NOT_FOUND.message == "license key not found"
        assert VerificationOutcome.INACTIVE.message == "license inactive"
        assert VerificationOutcome.EXPIRED.message == "license expired"
        assert VerificationOutcome.DOMAIN_MISMATCH.message == "domain mismatch"
        assert VerificationOutcome.VALID.message == "license valid"

    def test_only_valid_is_valid(self):
        assert [o for o in VerificationOutcome if o.is_valid] == [VerificationOutcome.VALID]
