"""
Django implementation of LicenseRepository port.

This adapter converts between domain entities and Django ORM models.
"""
import uuid
from datetime import datetime
from typing import List, Optional

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction

from core.domain.exceptions import DuplicateLicenseKeyError
from core.domain.value_objects import Email
from licenses.domain.license import License, LicenseCreator
from licenses.infrastructure.models import License as LicenseModel
from licenses.ports.license_repository import LicenseRepository


class DjangoLicenseRepository(LicenseRepository):
    """
    Django ORM implementation of LicenseRepository.

    This adapter:
    1. Converts Django models to domain entities
    2. Converts domain entities to Django models
    3. Maps key uniqueness violations to DuplicateLicenseKeyError
    """

    def _to_domain(self, model: LicenseModel) -> License:
        """
        Convert Django model to domain entity.

        Args:
            model: Django License model

        Returns:
            License domain entity
        """
        creator = None
        if model.created_by_id and model.created_by is not None:
            creator = LicenseCreator(name=model.created_by.name, email=model.created_by.email)

        return License(
            id=model.id,
            key=model.key,
            email=Email(model.email),
            domain=model.domain,
            is_active=model.is_active,
            expires_at=model.expires_at,
            activated_at=model.activated_at,
            created_by_id=model.created_by_id,
            created_at=model.created_at,
            updated_at=model.updated_at,
            created_by=creator,
        )

    def _to_model(self, license: License) -> LicenseModel:
        """
        Convert domain entity to Django model.

        Args:
            license: License domain entity

        Returns:
            Django License model
        """
        model = LicenseModel.objects.filter(id=license.id).first()
        if model is None:
            model = LicenseModel(id=license.id, created_by_id=license.created_by_id)
        model.key = license.key
        model.email = license.email.value
        model.domain = license.domain
        model.is_active = license.is_active
        model.expires_at = license.expires_at
        # Never clear an activation stamp from a stale entity
        if model.activated_at is None:
            model.activated_at = license.activated_at
        return model

    def _queryset(self):
        return LicenseModel.objects.select_related("created_by")

    @sync_to_async
    def save(self, license: License) -> License:
        """
        Save a license entity.

        Args:
            license: License entity to save

        Returns:
            Saved license entity
        """
        try:
            with transaction.atomic():
                model = self._to_model(license)
                model.save()
        except IntegrityError as exc:
            if LicenseModel.objects.filter(key=license.key).exclude(id=license.id).exists():
                raise DuplicateLicenseKeyError() from exc
            raise
        return self._to_domain(self._queryset().get(id=model.id))

    @sync_to_async
    def find_by_id(self, license_id: uuid.UUID) -> Optional[License]:
        model = self._queryset().filter(id=license_id).first()
        return self._to_domain(model) if model else None

    @sync_to_async
    def find_by_key(self, key: str) -> Optional[License]:
        model = self._queryset().filter(key=key).first()
        return self._to_domain(model) if model else None

    @sync_to_async
    def list_all(self) -> List[License]:
        return [self._to_domain(model) for model in self._queryset().order_by("-created_at")]

    @sync_to_async
    def delete(self, license_id: uuid.UUID) -> bool:
        deleted, _ = LicenseModel.objects.filter(id=license_id).delete()
        return deleted > 0

    @sync_to_async
    def mark_activated(self, license_id: uuid.UUID, activated_at: datetime) -> bool:
        updated = LicenseModel.objects.filter(id=license_id, activated_at__isnull=True).update(
            activated_at=activated_at
        )
        return updated == 1
