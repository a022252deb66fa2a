"""
Integration tests for repository implementations.
"""

import uuid
from datetime import timedelta

import pytest
from asgiref.sync import async_to_sync
from django.utils import timezone

from accounts.domain.admin import Admin
from core.domain.exceptions import DuplicateLicenseKeyError, EmailTakenError, UsernameTakenError
from licenses.domain.license import License
from licenses.infrastructure.models import License as LicenseModel
from tests.fakes import SAMPLE_KEY

OTHER_KEY = "ZZZZZ-YYYYY-XXXXX-WWWWW-VVVVV"


def new_admin(username="bob", email="bob@example.com"):
    return Admin.create(
        username=username,
        name="Bob Builder",
        email=email,
        password_hash="hash",
        secret_key="secret",
        mobile_number="",
    )


@pytest.mark.django_db
@pytest.mark.integration
class TestAdminRepository:
    """Integration tests for AdminRepository."""

    def test_save_and_find(self, admin_repository):
        """Test saving and finding an admin."""
        saved = async_to_sync(admin_repository.save)(new_admin())

        assert async_to_sync(admin_repository.find_by_id)(saved.id).username == "bob"
        assert async_to_sync(admin_repository.find_by_email)("bob@example.com").id == saved.id
        assert async_to_sync(admin_repository.find_by_username)("bob").id == saved.id
        assert async_to_sync(admin_repository.find_by_id)(uuid.uuid4()) is None

    def test_code_pair_round_trip(self, admin_repository):
        expires_at = timezone.now() + timedelta(minutes=5)
        saved = async_to_sync(admin_repository.save)(
            new_admin().issue_verification_code("01234567", expires_at)
        )

        found = async_to_sync(admin_repository.find_by_id)(saved.id)

        assert found.verification_code == "01234567"
        assert found.verification_expires_at == expires_at

    def test_unique_username_and_email(self, admin_repository):
        async_to_sync(admin_repository.save)(new_admin())

        with pytest.raises(UsernameTakenError):
            async_to_sync(admin_repository.save)(new_admin(email="other@example.com"))
        with pytest.raises(EmailTakenError):
            async_to_sync(admin_repository.save)(new_admin(username="other"))

    def test_count_and_setup_flag(self, admin_repository):
        assert async_to_sync(admin_repository.count)() == 0
        assert async_to_sync(admin_repository.any_setup_enabled)() is False

        saved = async_to_sync(admin_repository.save)(new_admin())
        async_to_sync(admin_repository.save)(saved.set_setup_enabled(True))

        assert async_to_sync(admin_repository.count)() == 1
        assert async_to_sync(admin_repository.any_setup_enabled)() is True

    def test_clear_expired_verification_codes(self, admin_repository):
        now = timezone.now()
        stale = async_to_sync(admin_repository.save)(
            new_admin().issue_verification_code("11111111", now - timedelta(seconds=1))
        )
        live = async_to_sync(admin_repository.save)(
            new_admin("carol", "carol@example.com").issue_verification_code(
                "22222222", now + timedelta(minutes=5)
            )
        )

        assert async_to_sync(admin_repository.clear_expired_verification_codes)(now) == 1
        assert async_to_sync(admin_repository.find_by_id)(stale.id).verification_code is None
        assert async_to_sync(admin_repository.find_by_id)(live.id).verification_code == "22222222"

    def test_consume_verification_code_once(self, admin_repository):
        """Test a stored code can be consumed by exactly one caller."""
        saved = async_to_sync(admin_repository.save)(
            new_admin().issue_verification_code("01234567", timezone.now() + timedelta(minutes=5))
        )
        consume = async_to_sync(admin_repository.consume_verification_code)

        assert consume(saved.id, "76543210") is False
        assert consume(saved.id, "01234567") is True
        assert consume(saved.id, "01234567") is False

        found = async_to_sync(admin_repository.find_by_id)(saved.id)
        assert found.verification_code is None
        assert found.verification_expires_at is None


@pytest.mark.django_db
@pytest.mark.integration
class TestLicenseRepository:
    """Integration tests for LicenseRepository."""

    def test_save_and_find(self, license_repository, db_admin):
        """Test saving and finding a license with its creator."""
        license = License.create(
            key=SAMPLE_KEY,
            email="customer@example.com",
            domain="good.com",
            created_by_id=db_admin.id,
        )

        saved = async_to_sync(license_repository.save)(license)
        found = async_to_sync(license_repository.find_by_key)(SAMPLE_KEY)

        assert found.id == saved.id
        assert found.domain == "good.com"
        assert found.created_by.name == db_admin.name
        assert found.created_by.email == db_admin.email
        assert async_to_sync(license_repository.find_by_key)(OTHER_KEY) is None

    def test_creator_deleted(self, license_repository, db_license, db_admin):
        """Test deleting the creator keeps the license with no creator."""
        db_admin.delete()

        found = async_to_sync(license_repository.find_by_id)(db_license.id)

        assert found is not None
        assert found.created_by_id is None
        assert found.created_by is None

    def test_duplicate_key(self, license_repository, db_license):
        with pytest.raises(DuplicateLicenseKeyError):
            async_to_sync(license_repository.save)(
                License.create(key=db_license.key, email="other@example.com")
            )

    def test_list_all_newest_first(self, license_repository, db_license):
        newer = async_to_sync(license_repository.save)(
            License.create(key=OTHER_KEY, email="other@example.com")
        )

        result = async_to_sync(license_repository.list_all)()

        assert [lic.id for lic in result] == [newer.id, db_license.id]

    def test_delete(self, license_repository, db_license):
        assert async_to_sync(license_repository.delete)(db_license.id) is True
        assert async_to_sync(license_repository.delete)(db_license.id) is False
        assert not LicenseModel.objects.filter(id=db_license.id).exists()

    def test_mark_activated_once(self, license_repository, db_license):
        """Test only the first stamp is kept."""
        first = timezone.now()

        assert async_to_sync(license_repository.mark_activated)(db_license.id, first) is True
        assert (
            async_to_sync(license_repository.mark_activated)(db_license.id, first + timedelta(hours=1))
            is False
        )
        assert LicenseModel.objects.get(id=db_license.id).activated_at == first

    def test_save_stale_entity_keeps_activation(self, license_repository, db_license):
        """Test saving an entity loaded before activation does not clear the stamp."""
        stamped_at = timezone.now()
        async_to_sync(license_repository.mark_activated)(db_license.id, stamped_at)

        async_to_sync(license_repository.save)(db_license.extend(stamped_at + timedelta(days=30)))

        assert LicenseModel.objects.get(id=db_license.id).activated_at == stamped_at
