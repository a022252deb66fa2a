"""
Admin profile handlers.
"""
import logging

from accounts.application.commands.update_profile import (
    SetSetupEnabledCommand,
    UpdateProfileCommand,
)
from accounts.application.dto.admin_dto import AdminProfileDTO
from accounts.application.queries.get_admin_profile import GetAdminProfileQuery
from accounts.domain.admin import Admin
from accounts.ports.admin_repository import AdminRepository
from accounts.ports.password_hasher import PasswordHasher
from core.domain.exceptions import AdminNotFoundError, IncorrectPasswordError, UsernameTakenError

logger = logging.getLogger(__name__)


async def _get_admin(admin_repository: AdminRepository, admin_id) -> Admin:
    admin = await admin_repository.find_by_id(admin_id)
    if not admin:
        raise AdminNotFoundError(f"Admin {admin_id} not found")
    return admin


class GetAdminProfileHandler:
    """Handler for GetAdminProfileQuery."""

    def __init__(self, admin_repository: AdminRepository):
        self.admin_repository = admin_repository

    async def handle(self, query: GetAdminProfileQuery) -> AdminProfileDTO:
        admin = await _get_admin(self.admin_repository, query.admin_id)
        return AdminProfileDTO.from_entity(admin)


class UpdateProfileHandler:
    """Handler for UpdateProfileCommand."""

    def __init__(self, admin_repository: AdminRepository, password_hasher: PasswordHasher):
        self.admin_repository = admin_repository
        self.password_hasher = password_hasher

    async def handle(self, command: UpdateProfileCommand) -> AdminProfileDTO:
        """
        Update profile fields and, when a new password is given, the password.

        Raises:
            AdminNotFoundError: Admin no longer exists
            UsernameTakenError: Username belongs to another admin
            IncorrectPasswordError: Current password missing or wrong
        """
        admin = await _get_admin(self.admin_repository, command.admin_id)

        if command.username and command.username != admin.username:
            owner = await self.admin_repository.find_by_username(command.username)
            if owner and owner.id != admin.id:
                raise UsernameTakenError()

        updated = admin.update_profile(
            name=command.name,
            username=command.username,
            mobile_number=command.mobile_number,
        )

        if command.new_password:
            if not command.current_password:
                raise IncorrectPasswordError("Current password is required")
            if not self.password_hasher.verify(command.current_password, admin.password_hash):
                raise IncorrectPasswordError()
            updated = updated.change_password(self.password_hasher.hash(command.new_password))
            logger.info("Admin password changed", extra={"admin_id": str(admin.id)})

        saved = await self.admin_repository.save(updated)
        return AdminProfileDTO.from_entity(saved)


class SetSetupEnabledHandler:
    """Handler for SetSetupEnabledCommand."""

    def __init__(self, admin_repository: AdminRepository):
        self.admin_repository = admin_repository

    async def handle(self, command: SetSetupEnabledCommand) -> AdminProfileDTO:
        admin = await _get_admin(self.admin_repository, command.admin_id)
        saved = await self.admin_repository.save(admin.set_setup_enabled(command.is_setup_enabled))
        logger.info(
            "Setup page %s",
            "enabled" if command.is_setup_enabled else "disabled",
            extra={"admin_id": str(admin.id)},
        )
        return AdminProfileDTO.from_entity(saved)
