"""
License repository port (interface).

This defines the contract for license persistence operations.
Implementations are in the infrastructure layer.
"""
import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from licenses.domain.license import License


class LicenseRepository(ABC):
    """
    Abstract repository for License entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def save(self, license: License) -> License:
        """
        Save a license entity.

        Args:
            license: License entity to save

        Returns:
            Saved license entity

        Raises:
            DuplicateLicenseKeyError: Key belongs to another license
        """
        pass

    @abstractmethod
    async def find_by_id(self, license_id: uuid.UUID) -> Optional[License]:
        """
        Find a license by ID.

        Args:
            license_id: License UUID

        Returns:
            License entity or None if not found
        """
        pass

    @abstractmethod
    async def find_by_key(self, key: str) -> Optional[License]:
        """
        Find a license by its exact key.

        Args:
            key: License key string

        Returns:
            License entity or None if not found
        """
        pass

    @abstractmethod
    async def list_all(self) -> List[License]:
        """
        List every license, newest first, with creator details attached.
        """
        pass

    @abstractmethod
    async def delete(self, license_id: uuid.UUID) -> bool:
        """
        Hard-delete a license.

        Returns:
            True if a row was deleted
        """
        pass

    @abstractmethod
    async def mark_activated(self, license_id: uuid.UUID, activated_at: datetime) -> bool:
        """
        Set the activation time only if it is still unset.

        Returns:
            True if this call stamped the activation
        """
        pass
