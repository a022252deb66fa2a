"""
Unit tests for license lifecycle handlers.
"""
import uuid
from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest

from core.domain.exceptions import (
    DuplicateLicenseKeyError,
    InvalidLicenseKeyFormatError,
    LicenseNotFoundError,
    MissingExpiryError,
)
from core.domain.value_objects import LICENSE_KEY_PATTERN
from licenses.application.commands.create_license import CreateLicenseCommand
from licenses.application.commands.delete_license import DeleteLicenseCommand
from licenses.application.commands.edit_license import EditLicenseCommand
from licenses.application.commands.extend_license import ExtendLicenseCommand
from licenses.application.handlers.license_lifecycle_handlers import (
    CreateLicenseHandler,
    DeleteLicenseHandler,
    EditLicenseHandler,
    ExtendLicenseHandler,
)
from licenses.application.handlers.list_licenses_handler import ListLicensesHandler
from licenses.application.queries.list_licenses import ListLicensesQuery
from licenses.domain.events import LicenseCreated, LicenseDeleted, LicenseExtended, LicenseUpdated
from licenses.domain.license import License, LicenseCreator

OTHER_KEY = "ZZZZZ-YYYYY-XXXXX-WWWWW-VVVVV"


@pytest.mark.asyncio
class TestCreateLicenseHandler:
    """Tests for CreateLicenseHandler."""

    async def test_create_with_supplied_key(self, memory_license_repository, recorded_events):
        """Test creating a license with a caller-supplied key."""
        admin_id = uuid.uuid4()
        handler = CreateLicenseHandler(license_repository=memory_license_repository)

        result = await handler.handle(
            CreateLicenseCommand(
                email="customer@example.com",
                key="AB12C-3D4E5-F6G7H-8J9K0-L1M2N",
                domain="good.com",
                created_by_id=admin_id,
            )
        )

        assert result.key == "AB12C-3D4E5-F6G7H-8J9K0-L1M2N"
        assert result.is_active is True
        assert result.activated_at is None
        assert result.domain == "good.com"
        stored = await memory_license_repository.find_by_id(result.id)
        assert stored.created_by_id == admin_id
        assert [e.license_id for e in recorded_events.of_type(LicenseCreated)] == [result.id]

    async def test_create_generates_key_when_omitted(self, memory_license_repository):
        handler = CreateLicenseHandler(license_repository=memory_license_repository)

        result = await handler.handle(CreateLicenseCommand(email="customer@example.com"))

        assert LICENSE_KEY_PATTERN.match(result.key)
        assert result.expires_at is None

    async def test_create_invalid_key_format(self, memory_license_repository):
        handler = CreateLicenseHandler(license_repository=memory_license_repository)

        with pytest.raises(InvalidLicenseKeyFormatError):
            await handler.handle(CreateLicenseCommand(email="customer@example.com", key="abc"))

        assert memory_license_repository.licenses == {}

    async def test_create_duplicate_key(self, memory_license_repository, sample_license):
        """Test a second license with the same key is rejected."""
        await memory_license_repository.save(sample_license)
        handler = CreateLicenseHandler(license_repository=memory_license_repository)

        with pytest.raises(DuplicateLicenseKeyError):
            await handler.handle(
                CreateLicenseCommand(email="other@example.com", key=sample_license.key)
            )


@pytest.mark.asyncio
class TestListLicensesHandler:
    """Tests for ListLicensesHandler."""

    async def test_newest_first_with_creator(self, memory_license_repository):
        now = datetime.now(timezone.utc)
        older = replace(
            License.create(key=OTHER_KEY, email="a@example.com"),
            created_at=now - timedelta(days=1),
        )
        newer = replace(
            License.create(key="AB12C-3D4E5-F6G7H-8J9K0-L1M2N", email="b@example.com"),
            created_at=now,
            created_by=LicenseCreator(name="Alice Admin", email="alice@example.com"),
        )
        await memory_license_repository.save(older)
        await memory_license_repository.save(newer)

        result = await ListLicensesHandler(memory_license_repository).handle(ListLicensesQuery())

        assert [dto.id for dto in result] == [newer.id, older.id]
        assert result[0].created_by_name == "Alice Admin"
        assert result[0].created_by_email == "alice@example.com"
        assert result[1].created_by_name is None

    async def test_empty(self, memory_license_repository):
        assert await ListLicensesHandler(memory_license_repository).handle(ListLicensesQuery()) == []


@pytest.mark.asyncio
class TestEditLicenseHandler:
    """Tests for EditLicenseHandler."""

    async def test_edit_overwrites_fields(self, memory_license_repository, sample_license, recorded_events):
        """Test edit replaces key, email and expiry."""
        await memory_license_repository.save(sample_license)
        handler = EditLicenseHandler(license_repository=memory_license_repository)

        result = await handler.handle(
            EditLicenseCommand(
                license_id=sample_license.id,
                key=OTHER_KEY,
                email="new@example.com",
                expires_at=None,
            )
        )

        assert result.key == OTHER_KEY
        assert result.email == "new@example.com"
        assert result.expires_at is None
        assert len(recorded_events.of_type(LicenseUpdated)) == 1

    async def test_edit_keeping_own_key(self, memory_license_repository, sample_license):
        """Test a license may keep its own key."""
        await memory_license_repository.save(sample_license)
        handler = EditLicenseHandler(license_repository=memory_license_repository)

        result = await handler.handle(
            EditLicenseCommand(
                license_id=sample_license.id, key=sample_license.key, email="new@example.com"
            )
        )

        assert result.key == sample_license.key

    async def test_edit_key_collision(self, memory_license_repository, sample_license):
        other = License.create(key=OTHER_KEY, email="other@example.com")
        await memory_license_repository.save(sample_license)
        await memory_license_repository.save(other)
        handler = EditLicenseHandler(license_repository=memory_license_repository)

        with pytest.raises(DuplicateLicenseKeyError):
            await handler.handle(
                EditLicenseCommand(license_id=other.id, key=sample_license.key, email="x@example.com")
            )

    async def test_edit_not_found(self, memory_license_repository):
        handler = EditLicenseHandler(license_repository=memory_license_repository)

        with pytest.raises(LicenseNotFoundError):
            await handler.handle(
                EditLicenseCommand(license_id=uuid.uuid4(), key=OTHER_KEY, email="x@example.com")
            )

    async def test_edit_invalid_key(self, memory_license_repository, sample_license):
        await memory_license_repository.save(sample_license)
        handler = EditLicenseHandler(license_repository=memory_license_repository)

        with pytest.raises(InvalidLicenseKeyFormatError):
            await handler.handle(
                EditLicenseCommand(license_id=sample_license.id, key="bad", email="x@example.com")
            )


@pytest.mark.asyncio
class TestExtendLicenseHandler:
    """Tests for ExtendLicenseHandler."""

    async def test_extend_reactivates(self, memory_license_repository, sample_license, recorded_events):
        """Test extending an inactive license makes it active again."""
        await memory_license_repository.save(replace(sample_license, is_active=False))
        new_expiry = datetime.now(timezone.utc) + timedelta(days=400)
        handler = ExtendLicenseHandler(license_repository=memory_license_repository)

        result = await handler.handle(
            ExtendLicenseCommand(license_id=sample_license.id, expires_at=new_expiry)
        )

        assert result.expires_at == new_expiry
        assert result.is_active is True
        events = recorded_events.of_type(LicenseExtended)
        assert len(events) == 1
        assert events[0].new_expiration == new_expiry

    async def test_extend_without_expiry(self, memory_license_repository):
        """Test a missing expiry is rejected before the license is looked up."""
        handler = ExtendLicenseHandler(license_repository=memory_license_repository)

        with pytest.raises(MissingExpiryError):
            await handler.handle(ExtendLicenseCommand(license_id=uuid.uuid4(), expires_at=None))

    async def test_extend_not_found(self, memory_license_repository):
        handler = ExtendLicenseHandler(license_repository=memory_license_repository)

        with pytest.raises(LicenseNotFoundError):
            await handler.handle(
                ExtendLicenseCommand(
                    license_id=uuid.uuid4(),
                    expires_at=datetime.now(timezone.utc) + timedelta(days=1),
                )
            )


@pytest.mark.asyncio
class TestDeleteLicenseHandler:
    """Tests for DeleteLicenseHandler."""

    async def test_delete_twice(self, memory_license_repository, sample_license, recorded_events):
        """Test the second delete of the same license reports not found."""
        await memory_license_repository.save(sample_license)
        handler = DeleteLicenseHandler(license_repository=memory_license_repository)

        await handler.handle(DeleteLicenseCommand(license_id=sample_license.id))
        assert await memory_license_repository.find_by_id(sample_license.id) is None
        assert len(recorded_events.of_type(LicenseDeleted)) == 1

        with pytest.raises(LicenseNotFoundError):
            await handler.handle(DeleteLicenseCommand(license_id=sample_license.id))
