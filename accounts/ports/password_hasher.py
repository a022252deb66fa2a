"""
Password hasher port (interface).
"""
from abc import ABC, abstractmethod


class PasswordHasher(ABC):
    """One-way password hash."""

    @abstractmethod
    def hash(self, raw_password: str) -> str:
        pass

    @abstractmethod
    def verify(self, raw_password: str, password_hash: str) -> bool:
        pass
