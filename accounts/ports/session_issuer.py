"""
Session issuer port (interface).

A session is an opaque bearer credential bound to an admin identity,
valid for a fixed absolute duration from issuance.
"""
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class SessionIdentity:
    """Identity carried by an admin session."""

    admin_id: uuid.UUID
    email: str
    name: str
    issued_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None


@dataclass(frozen=True)
class IssuedSession:
    """A freshly issued credential."""

    token: str
    identity: SessionIdentity
    expires_at: datetime


class SessionIssuer(ABC):
    """Issues and resolves admin session credentials."""

    @abstractmethod
    def issue(self, identity: SessionIdentity) -> IssuedSession:
        pass

    @abstractmethod
    def resolve(self, token: str) -> Optional[SessionIdentity]:
        """
        Extract the identity from a credential.

        Returns:
            The identity, or None if the credential is malformed,
            tampered with, or expired
        """
        pass
