"""
Password hashing backed by django.contrib.auth.hashers.
"""
from django.contrib.auth.hashers import check_password, make_password

from accounts.ports.password_hasher import PasswordHasher


class DjangoPasswordHasher(PasswordHasher):
    """Uses the first entry of settings.PASSWORD_HASHERS."""

    def hash(self, raw_password: str) -> str:
        return make_password(raw_password)

    def verify(self, raw_password: str, password_hash: str) -> bool:
        if not raw_password or not password_hash:
            return False
        return check_password(raw_password, password_hash)
