"""
Unit tests for setup, profile and maintenance handlers.
"""
import uuid
from datetime import datetime, timedelta, timezone

import pytest

from accounts.application.commands.create_admin import CreateAdminCommand
from accounts.application.commands.update_profile import (
    SetSetupEnabledCommand,
    UpdateProfileCommand,
)
from accounts.application.handlers.maintenance_handlers import (
    PurgeExpiredVerificationCodesHandler,
)
from accounts.application.handlers.profile_handlers import (
    GetAdminProfileHandler,
    SetSetupEnabledHandler,
    UpdateProfileHandler,
)
from accounts.application.handlers.setup_handlers import CheckSetupAccessHandler, CreateAdminHandler
from accounts.application.queries.check_setup_access import CheckSetupAccessQuery
from accounts.application.queries.get_admin_profile import GetAdminProfileQuery
from accounts.domain.admin import Admin
from accounts.domain.events import AdminCreated
from core.domain.exceptions import (
    AdminNotFoundError,
    EmailTakenError,
    IncorrectPasswordError,
    SetupDisabledError,
    UsernameTakenError,
)
from tests.fakes import ADMIN_PASSWORD, InMemoryAdminRepository


def create_command(**overrides):
    fields = dict(
        username="bob",
        name="Bob Builder",
        email="bob@example.com",
        password="a-long-password",
        secret_key="bob-secret",
        mobile_number="+15550111",
        ip_address="192.0.2.10",
    )
    fields.update(overrides)
    return CreateAdminCommand(**fields)


@pytest.mark.asyncio
class TestSetupHandlers:
    """Tests for CheckSetupAccessHandler and CreateAdminHandler."""

    async def test_open_when_no_admin(self):
        result = await CheckSetupAccessHandler(InMemoryAdminRepository()).handle(
            CheckSetupAccessQuery()
        )

        assert result.is_allowed is True
        assert result.admin_count == 0

    async def test_first_admin_closes_setup(self, password_hasher, recorded_events):
        """Test creating the first admin closes the gate for a second one."""
        repository = InMemoryAdminRepository()
        handler = CreateAdminHandler(admin_repository=repository, password_hasher=password_hasher)

        profile = await handler.handle(create_command())

        assert profile.username == "bob"
        assert profile.is_setup_enabled is False
        assert profile.last_known_ip == "192.0.2.10"
        stored = await repository.find_by_id(profile.id)
        assert password_hasher.verify("a-long-password", stored.password_hash)
        assert stored.secret_key == "bob-secret"
        assert len(recorded_events.of_type(AdminCreated)) == 1

        access = await CheckSetupAccessHandler(repository).handle(CheckSetupAccessQuery())
        assert access.is_allowed is False

        with pytest.raises(SetupDisabledError):
            await handler.handle(create_command(username="carol", email="carol@example.com"))

    async def test_setup_enabled_admin_opens_gate(self, memory_admin_repository, sample_admin, password_hasher):
        await memory_admin_repository.save(sample_admin.set_setup_enabled(True))
        handler = CreateAdminHandler(
            admin_repository=memory_admin_repository, password_hasher=password_hasher
        )

        profile = await handler.handle(create_command())

        assert await memory_admin_repository.count() == 2
        assert profile.email == "bob@example.com"

    async def test_username_and_email_collisions(
        self, memory_admin_repository, sample_admin, password_hasher
    ):
        await memory_admin_repository.save(sample_admin.set_setup_enabled(True))
        handler = CreateAdminHandler(
            admin_repository=memory_admin_repository, password_hasher=password_hasher
        )

        with pytest.raises(UsernameTakenError):
            await handler.handle(create_command(username=sample_admin.username))
        with pytest.raises(EmailTakenError):
            await handler.handle(create_command(email=str(sample_admin.email)))


@pytest.mark.asyncio
class TestProfileHandlers:
    """Tests for the profile handlers."""

    async def test_get_profile(self, memory_admin_repository, sample_admin):
        profile = await GetAdminProfileHandler(memory_admin_repository).handle(
            GetAdminProfileQuery(admin_id=sample_admin.id)
        )

        assert profile.id == sample_admin.id
        assert profile.name == "Alice Admin"
        assert not hasattr(profile, "secret_key")
        assert not hasattr(profile, "password_hash")

    async def test_get_profile_missing_admin(self, memory_admin_repository):
        with pytest.raises(AdminNotFoundError):
            await GetAdminProfileHandler(memory_admin_repository).handle(
                GetAdminProfileQuery(admin_id=uuid.uuid4())
            )

    async def test_update_fields(self, memory_admin_repository, sample_admin, password_hasher):
        handler = UpdateProfileHandler(memory_admin_repository, password_hasher)

        profile = await handler.handle(
            UpdateProfileCommand(admin_id=sample_admin.id, name="Alice B.", mobile_number="")
        )

        assert profile.name == "Alice B."
        assert profile.username == "alice"
        assert profile.mobile_number == ""

    async def test_change_password(self, memory_admin_repository, sample_admin, password_hasher):
        """Test a password change with the right current password."""
        handler = UpdateProfileHandler(memory_admin_repository, password_hasher)

        await handler.handle(
            UpdateProfileCommand(
                admin_id=sample_admin.id,
                current_password=ADMIN_PASSWORD,
                new_password="brand-new-password",
            )
        )

        stored = await memory_admin_repository.find_by_id(sample_admin.id)
        assert password_hasher.verify("brand-new-password", stored.password_hash)

    @pytest.mark.parametrize("current_password", [None, "", "wrong-password"])
    async def test_change_password_requires_current(
        self, memory_admin_repository, sample_admin, password_hasher, current_password
    ):
        handler = UpdateProfileHandler(memory_admin_repository, password_hasher)

        with pytest.raises(IncorrectPasswordError):
            await handler.handle(
                UpdateProfileCommand(
                    admin_id=sample_admin.id,
                    current_password=current_password,
                    new_password="brand-new-password",
                )
            )

        stored = await memory_admin_repository.find_by_id(sample_admin.id)
        assert password_hasher.verify(ADMIN_PASSWORD, stored.password_hash)

    async def test_username_taken(self, memory_admin_repository, sample_admin, password_hasher):
        other = Admin.create(
            username="bob",
            name="Bob",
            email="bob@example.com",
            password_hash="x",
            secret_key="y",
            mobile_number="",
        )
        await memory_admin_repository.save(other)
        handler = UpdateProfileHandler(memory_admin_repository, password_hasher)

        with pytest.raises(UsernameTakenError):
            await handler.handle(UpdateProfileCommand(admin_id=sample_admin.id, username="bob"))

    async def test_set_setup_enabled(self, memory_admin_repository, sample_admin):
        handler = SetSetupEnabledHandler(memory_admin_repository)

        profile = await handler.handle(
            SetSetupEnabledCommand(admin_id=sample_admin.id, is_setup_enabled=True)
        )

        assert profile.is_setup_enabled is True
        assert await memory_admin_repository.any_setup_enabled() is True


@pytest.mark.asyncio
class TestPurgeExpiredVerificationCodesHandler:
    """Tests for PurgeExpiredVerificationCodesHandler."""

    async def test_purges_only_expired(self, password_hasher):
        now = datetime.now(timezone.utc)
        stale = Admin.create(
            username="stale", name="Stale", email="stale@example.com",
            password_hash="x", secret_key="y", mobile_number="",
        ).issue_verification_code("11111111", now - timedelta(minutes=1))
        live = Admin.create(
            username="live", name="Live", email="live@example.com",
            password_hash="x", secret_key="y", mobile_number="",
        ).issue_verification_code("22222222", now + timedelta(minutes=4))
        repository = InMemoryAdminRepository([stale, live])

        cleared = await PurgeExpiredVerificationCodesHandler(repository).handle()

        assert cleared == 1
        assert (await repository.find_by_id(stale.id)).verification_code is None
        assert (await repository.find_by_id(live.id)).verification_code == "22222222"
