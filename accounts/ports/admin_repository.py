"""
Admin repository port (interface).

This defines the contract for admin persistence operations.
Implementations are in the infrastructure layer.
"""
import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from accounts.domain.admin import Admin


class AdminRepository(ABC):
    """
    Abstract repository for Admin entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def save(self, admin: Admin) -> Admin:
        """
        Save an admin entity.

        Raises:
            UsernameTakenError: Username belongs to another admin
            EmailTakenError: Email belongs to another admin
        """
        pass

    @abstractmethod
    async def find_by_id(self, admin_id: uuid.UUID) -> Optional[Admin]:
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[Admin]:
        pass

    @abstractmethod
    async def find_by_username(self, username: str) -> Optional[Admin]:
        pass

    @abstractmethod
    async def count(self) -> int:
        """Number of admin accounts."""
        pass

    @abstractmethod
    async def any_setup_enabled(self) -> bool:
        """True if any admin has re-opened the setup page."""
        pass

    @abstractmethod
    async def clear_expired_verification_codes(self, current_time: datetime) -> int:
        """
        Clear code/expiry pairs whose expiry has passed.

        Returns:
            Number of admins updated
        """
        pass

    @abstractmethod
    async def consume_verification_code(self, admin_id: uuid.UUID, code: str) -> bool:
        """
        Clear the code/expiry pair only if ``code`` is still the stored code.

        Returns:
            True if this call cleared the code
        """
        pass
