"""
Django implementation of AdminRepository port.

This adapter converts between domain entities and Django ORM models.
"""
import uuid
from datetime import datetime
from typing import Optional

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction

from accounts.domain.admin import Admin
from accounts.infrastructure.models import Admin as AdminModel
from accounts.ports.admin_repository import AdminRepository
from core.domain.exceptions import EmailTakenError, UsernameTakenError
from core.domain.value_objects import Email


class DjangoAdminRepository(AdminRepository):
    """Django ORM implementation of AdminRepository."""

    def _to_domain(self, model: AdminModel) -> Admin:
        return Admin(
            id=model.id,
            username=model.username,
            name=model.name,
            email=Email(model.email),
            password_hash=model.password_hash,
            secret_key=model.secret_key,
            mobile_number=model.mobile_number,
            profile_image=model.profile_image,
            last_known_ip=model.last_known_ip,
            last_login_at=model.last_login_at,
            verification_code=model.verification_code,
            verification_expires_at=model.verification_expires_at,
            is_setup_enabled=model.is_setup_enabled,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, admin: Admin) -> AdminModel:
        model = AdminModel.objects.filter(id=admin.id).first() or AdminModel(id=admin.id)
        model.username = admin.username
        model.name = admin.name
        model.email = admin.email.value
        model.password_hash = admin.password_hash
        model.secret_key = admin.secret_key
        model.mobile_number = admin.mobile_number
        model.profile_image = admin.profile_image
        model.last_known_ip = admin.last_known_ip
        model.last_login_at = admin.last_login_at
        model.verification_code = admin.verification_code
        model.verification_expires_at = admin.verification_expires_at
        model.is_setup_enabled = admin.is_setup_enabled
        return model

    @sync_to_async
    def save(self, admin: Admin) -> Admin:
        """
        Save an admin entity.

        Uniqueness is left to the database constraints; a violation is
        reported as the matching domain error.
        """
        try:
            with transaction.atomic():
                model = self._to_model(admin)
                model.save()
        except IntegrityError as exc:
            clashes = AdminModel.objects.exclude(id=admin.id)
            if clashes.filter(username=admin.username).exists():
                raise UsernameTakenError() from exc
            if clashes.filter(email=admin.email.value).exists():
                raise EmailTakenError() from exc
            raise
        return self._to_domain(model)

    @sync_to_async
    def find_by_id(self, admin_id: uuid.UUID) -> Optional[Admin]:
        model = AdminModel.objects.filter(id=admin_id).first()
        return self._to_domain(model) if model else None

    @sync_to_async
    def find_by_email(self, email: str) -> Optional[Admin]:
        model = AdminModel.objects.filter(email=email).first()
        return self._to_domain(model) if model else None

    @sync_to_async
    def find_by_username(self, username: str) -> Optional[Admin]:
        model = AdminModel.objects.filter(username=username).first()
        return self._to_domain(model) if model else None

    @sync_to_async
    def count(self) -> int:
        return AdminModel.objects.count()

    @sync_to_async
    def any_setup_enabled(self) -> bool:
        return AdminModel.objects.filter(is_setup_enabled=True).exists()

    @sync_to_async
    def clear_expired_verification_codes(self, current_time: datetime) -> int:
        return AdminModel.objects.filter(verification_expires_at__lt=current_time).update(
            verification_code=None, verification_expires_at=None
        )

    @sync_to_async
    def consume_verification_code(self, admin_id: uuid.UUID, code: str) -> bool:
        updated = AdminModel.objects.filter(id=admin_id, verification_code=code).update(
            verification_code=None, verification_expires_at=None
        )
        return updated == 1
