"""
License lifecycle handlers.

Handlers for create, edit, extend and delete license commands. All of them
run on behalf of a signed-in admin.
"""
import logging

from core.domain.exceptions import (
    DuplicateLicenseKeyError,
    LicenseNotFoundError,
    MissingExpiryError,
)
from core.infrastructure.events import event_bus
from licenses.application.commands.create_license import CreateLicenseCommand
from licenses.application.commands.delete_license import DeleteLicenseCommand
from licenses.application.commands.edit_license import EditLicenseCommand
from licenses.application.commands.extend_license import ExtendLicenseCommand
from licenses.application.dto.license_dto import LicenseDTO
from licenses.domain.events import (
    LicenseCreated,
    LicenseDeleted,
    LicenseExtended,
    LicenseUpdated,
)
from licenses.domain.license import License
from licenses.domain.license_key import validate_license_key
from licenses.domain.services import LicenseKeyGenerator
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


async def _get_license(license_repository: LicenseRepository, license_id) -> License:
    license = await license_repository.find_by_id(license_id)
    if not license:
        raise LicenseNotFoundError(f"License {license_id} not found")
    return license


class CreateLicenseHandler:
    """Handler for CreateLicenseCommand."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repositories."""
        self.license_repository = license_repository

    async def handle(self, command: CreateLicenseCommand) -> LicenseDTO:
        """
        Handle create license command.

        Args:
            command: CreateLicenseCommand

        Returns:
            The created license, active and not yet activated

        Raises:
            InvalidLicenseKeyFormatError: Supplied key has the wrong format
            DuplicateLicenseKeyError: Key already exists
        """
        key = validate_license_key(command.key) if command.key else LicenseKeyGenerator.generate()

        if await self.license_repository.find_by_key(key):
            raise DuplicateLicenseKeyError()

        license = License.create(
            key=key,
            email=command.email,
            domain=command.domain,
            expires_at=command.expires_at,
            created_by_id=command.created_by_id,
        )
        saved = await self.license_repository.save(license)

        logger.info("License created", extra={"license_id": str(saved.id)})
        await event_bus.publish(
            LicenseCreated(
                aggregate_id=str(saved.id),
                license_id=saved.id,
                created_by_id=saved.created_by_id,
            )
        )

        return LicenseDTO.from_entity(saved)


class EditLicenseHandler:
    """Handler for EditLicenseCommand."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repositories."""
        self.license_repository = license_repository

    async def handle(self, command: EditLicenseCommand) -> LicenseDTO:
        """
        Handle edit license command.

        Raises:
            LicenseNotFoundError: License not found
            InvalidLicenseKeyFormatError: New key has the wrong format
            DuplicateLicenseKeyError: New key belongs to a different license
        """
        license = await _get_license(self.license_repository, command.license_id)
        key = validate_license_key(command.key)

        owner = await self.license_repository.find_by_key(key)
        if owner and owner.id != license.id:
            raise DuplicateLicenseKeyError()

        saved = await self.license_repository.save(
            license.edit(key=key, email=command.email, expires_at=command.expires_at)
        )

        await event_bus.publish(LicenseUpdated(aggregate_id=str(saved.id), license_id=saved.id))

        return LicenseDTO.from_entity(saved)


class ExtendLicenseHandler:
    """Handler for ExtendLicenseCommand."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repositories."""
        self.license_repository = license_repository

    async def handle(self, command: ExtendLicenseCommand) -> LicenseDTO:
        """
        Handle extend license command.

        Raises:
            MissingExpiryError: No new expiry given
            LicenseNotFoundError: License not found
        """
        if command.expires_at is None:
            raise MissingExpiryError()

        license = await _get_license(self.license_repository, command.license_id)
        saved = await self.license_repository.save(license.extend(command.expires_at))

        await event_bus.publish(
            LicenseExtended(
                aggregate_id=str(saved.id),
                license_id=saved.id,
                new_expiration=command.expires_at,
            )
        )

        return LicenseDTO.from_entity(saved)


class DeleteLicenseHandler:
    """Handler for DeleteLicenseCommand."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repositories."""
        self.license_repository = license_repository

    async def handle(self, command: DeleteLicenseCommand) -> None:
        """
        Handle delete license command.

        Raises:
            LicenseNotFoundError: License not found (including already deleted)
        """
        deleted = await self.license_repository.delete(command.license_id)
        if not deleted:
            raise LicenseNotFoundError(f"License {command.license_id} not found")

        logger.info("License deleted", extra={"license_id": str(command.license_id)})
        await event_bus.publish(
            LicenseDeleted(aggregate_id=str(command.license_id), license_id=command.license_id)
        )
