"""
Signed-token implementation of the SessionIssuer port.

Tokens are produced by django.core.signing: the payload is HMAC-signed with
SECRET_KEY and timestamped, and is rejected once older than
ADMIN_SESSION_MAX_AGE. There is no server-side session row and no renewal.
"""
import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from django.conf import settings
from django.core import signing

from accounts.ports.session_issuer import IssuedSession, SessionIdentity, SessionIssuer

logger = logging.getLogger(__name__)


class SignedTokenSessionIssuer(SessionIssuer):
    """Stateless, signed admin session tokens."""

    def _max_age(self) -> int:
        return settings.ADMIN_SESSION_MAX_AGE

    def issue(self, identity: SessionIdentity) -> IssuedSession:
        issued_at = datetime.now(timezone.utc)
        expires_at = issued_at + timedelta(seconds=self._max_age())
        payload = {
            "sub": str(identity.admin_id),
            "email": identity.email,
            "name": identity.name,
            "iat": int(issued_at.timestamp()),
        }
        token = signing.dumps(payload, salt=settings.ADMIN_SESSION_SALT, compress=True)
        return IssuedSession(
            token=token,
            identity=SessionIdentity(
                admin_id=identity.admin_id,
                email=identity.email,
                name=identity.name,
                issued_at=issued_at,
                expires_at=expires_at,
            ),
            expires_at=expires_at,
        )

    def resolve(self, token: str) -> Optional[SessionIdentity]:
        if not token:
            return None
        try:
            payload = signing.loads(
                token, salt=settings.ADMIN_SESSION_SALT, max_age=self._max_age()
            )
        except signing.SignatureExpired:
            logger.info("Rejected expired admin session")
            return None
        except signing.BadSignature:
            logger.warning("Rejected admin session with bad signature")
            return None

        try:
            issued_at = datetime.fromtimestamp(payload["iat"], tz=timezone.utc)
            return SessionIdentity(
                admin_id=uuid.UUID(payload["sub"]),
                email=payload["email"],
                name=payload["name"],
                issued_at=issued_at,
                expires_at=issued_at + timedelta(seconds=self._max_age()),
            )
        except (KeyError, TypeError, ValueError):
            logger.warning("Rejected admin session with malformed payload")
            return None
