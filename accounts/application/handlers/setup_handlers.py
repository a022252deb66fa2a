"""
Account setup handlers.

Setup is open while no admin exists, or while any admin has re-opened it
from their profile. The gate is read from the store on every call.
"""
import logging

from accounts.application.commands.create_admin import CreateAdminCommand
from accounts.application.dto.admin_dto import AdminProfileDTO, SetupAccessDTO
from accounts.application.queries.check_setup_access import CheckSetupAccessQuery
from accounts.domain.admin import Admin
from accounts.domain.events import AdminCreated
from accounts.ports.admin_repository import AdminRepository
from accounts.ports.password_hasher import PasswordHasher
from core.domain.exceptions import EmailTakenError, SetupDisabledError, UsernameTakenError
from core.infrastructure.events import event_bus

logger = logging.getLogger(__name__)


class CheckSetupAccessHandler:
    """Handler for CheckSetupAccessQuery."""

    def __init__(self, admin_repository: AdminRepository):
        self.admin_repository = admin_repository

    async def handle(self, query: CheckSetupAccessQuery) -> SetupAccessDTO:
        admin_count = await self.admin_repository.count()
        is_allowed = admin_count == 0 or await self.admin_repository.any_setup_enabled()
        return SetupAccessDTO(is_allowed=is_allowed, admin_count=admin_count)


class CreateAdminHandler:
    """Handler for CreateAdminCommand."""

    def __init__(self, admin_repository: AdminRepository, password_hasher: PasswordHasher):
        self.admin_repository = admin_repository
        self.password_hasher = password_hasher

    async def handle(self, command: CreateAdminCommand) -> AdminProfileDTO:
        """
        Create an admin account.

        Raises:
            SetupDisabledError: The setup gate is closed
            UsernameTakenError: Username already registered
            EmailTakenError: Email already registered
        """
        access = await CheckSetupAccessHandler(self.admin_repository).handle(
            CheckSetupAccessQuery()
        )
        if not access.is_allowed:
            logger.warning("Setup attempted while disabled", extra={"username": command.username})
            raise SetupDisabledError()

        if await self.admin_repository.find_by_username(command.username):
            raise UsernameTakenError()
        if await self.admin_repository.find_by_email(command.email):
            raise EmailTakenError()

        admin = Admin.create(
            username=command.username,
            name=command.name,
            email=command.email,
            password_hash=self.password_hasher.hash(command.password),
            secret_key=command.secret_key,
            mobile_number=command.mobile_number,
            profile_image=command.profile_image,
            last_known_ip=command.ip_address,
        )
        saved = await self.admin_repository.save(admin)

        await event_bus.publish(
            AdminCreated(aggregate_id=str(saved.id), admin_id=saved.id, username=saved.username)
        )

        return AdminProfileDTO.from_entity(saved)
